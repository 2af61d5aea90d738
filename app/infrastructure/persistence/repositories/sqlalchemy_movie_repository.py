"""SQLAlchemy implementation of MovieRepository."""
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.domain.entities.movie import Movie as MovieEntity
from app.domain.repositories.movie_repository import MovieRepository
from app.domain.value_objects.rating import RatingAggregate
from app.domain.value_objects.search_criteria import SearchCriteria
from app.infrastructure.persistence import models

EDITABLE_FIELDS = ("title", "director", "year", "genre", "description", "poster_url")


def _to_aggregate(row: models.Movie) -> RatingAggregate:
    return RatingAggregate(
        rating_total=row.rating_total or 0,
        num_ratings=row.num_ratings or 0,
    )


def _to_entity(row: models.Movie) -> MovieEntity:
    """Map ORM model to domain entity."""
    return MovieEntity(
        id=row.id,
        title=row.title,
        director=row.director,
        year=row.year,
        genre=row.genre,
        description=row.description,
        poster_url=row.poster_url,
        rating=_to_aggregate(row),
    )


class SQLAlchemyMovieRepository(MovieRepository):
    """Movie repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[MovieEntity]:
        rows = (
            self.session.query(models.Movie)
            .order_by(models.Movie.id)
            .all()
        )
        return [_to_entity(r) for r in rows]

    def search(self, criteria: SearchCriteria) -> List[MovieEntity]:
        query = self.session.query(models.Movie)
        if criteria.title is not None:
            query = query.filter(models.Movie.title.icontains(criteria.title, autoescape=True))
        if criteria.director is not None:
            query = query.filter(models.Movie.director.icontains(criteria.director, autoescape=True))
        if criteria.genre is not None:
            query = query.filter(models.Movie.genre.icontains(criteria.genre, autoescape=True))
        if criteria.year is not None:
            query = query.filter(models.Movie.year == criteria.year)
        return [_to_entity(r) for r in query.order_by(models.Movie.id).all()]

    def get_by_id(self, movie_id: int) -> Optional[MovieEntity]:
        row = self.session.get(models.Movie, movie_id)
        return _to_entity(row) if row else None

    def create(self, movie: MovieEntity) -> MovieEntity:
        row = models.Movie(
            title=movie.title,
            director=movie.director,
            year=movie.year,
            genre=movie.genre,
            description=movie.description,
            poster_url=movie.poster_url,
            average_rating=movie.rating.average_rating,
            num_ratings=movie.rating.num_ratings,
            rating_total=movie.rating.rating_total,
        )
        self.session.add(row)
        self.session.flush()
        return _to_entity(row)

    def update(self, movie_id: int, changes: Dict[str, Any]) -> Optional[MovieEntity]:
        row = self.session.get(models.Movie, movie_id)
        if not row:
            return None
        for field_name, value in changes.items():
            if field_name not in EDITABLE_FIELDS:
                raise ValueError(f"Field '{field_name}' cannot be updated")
            setattr(row, field_name, value)
        self.session.flush()
        return _to_entity(row)

    def delete(self, movie_id: int) -> bool:
        deleted = (
            self.session.query(models.Movie)
            .filter(models.Movie.id == movie_id)
            .delete(synchronize_session=False)
        )
        return deleted > 0

    def get_aggregate(self, movie_id: int) -> Optional[RatingAggregate]:
        row = self.session.get(models.Movie, movie_id)
        return _to_aggregate(row) if row else None

    def lock_aggregate(self, movie_id: int) -> Optional[RatingAggregate]:
        row = (
            self.session.query(models.Movie)
            .filter(models.Movie.id == movie_id)
            .with_for_update()
            .one_or_none()
        )
        return _to_aggregate(row) if row else None

    def save_aggregate(self, movie_id: int, aggregate: RatingAggregate) -> None:
        (
            self.session.query(models.Movie)
            .filter(models.Movie.id == movie_id)
            .update(
                {
                    models.Movie.average_rating: aggregate.average_rating,
                    models.Movie.num_ratings: aggregate.num_ratings,
                    models.Movie.rating_total: aggregate.rating_total,
                },
                synchronize_session=False,
            )
        )
