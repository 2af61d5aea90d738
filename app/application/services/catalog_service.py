"""Catalog service - movie CRUD and search over the store."""
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.services.validation import validate_movie_id
from app.constants import (
    MSG_DUPLICATE_MOVIE,
    MSG_MOVIE_NOT_FOUND,
    MSG_NO_UPDATE_FIELDS,
)
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.entities.movie import Movie
from app.domain.repositories.movie_repository import MovieRepository
from app.domain.value_objects.search_criteria import SearchCriteria
from app.infrastructure.persistence.db import Database
from app.infrastructure.persistence.repositories.sqlalchemy_movie_repository import (
    SQLAlchemyMovieRepository,
)

logger = logging.getLogger(__name__)


class CatalogService:
    """Create, read, update, delete and search movies.

    Field-level validation of payloads happens at the API boundary; this
    service enforces ids, existence and uniqueness.
    """

    def __init__(
        self,
        database: Database,
        repository_factory: Callable[[Session], MovieRepository] = SQLAlchemyMovieRepository,
    ):
        self._database = database
        self._repository_factory = repository_factory

    def list_movies(self) -> List[Movie]:
        with self._database.transaction() as session:
            return self._repository_factory(session).list_all()

    def search_movies(
        self,
        title: Optional[str] = None,
        director: Optional[str] = None,
        genre: Optional[str] = None,
        year: Optional[Any] = None,
    ) -> List[Movie]:
        """Search movies; raises ValidationError when no criterion is given."""
        criteria = SearchCriteria.from_query(title=title, director=director, genre=genre, year=year)
        with self._database.transaction() as session:
            movies = self._repository_factory(session).search(criteria)
        logger.debug(f"Search {criteria.to_dict()} matched {len(movies)} movie(s)")
        return movies

    def get_movie(self, movie_id: int) -> Movie:
        movie_id = validate_movie_id(movie_id)
        with self._database.transaction() as session:
            movie = self._repository_factory(session).get_by_id(movie_id)
        if movie is None:
            raise NotFoundError(MSG_MOVIE_NOT_FOUND)
        return movie

    def create_movie(self, fields: Dict[str, Any]) -> Movie:
        movie = Movie(id=None, **fields)
        if not movie.is_valid():
            raise ValidationError("Title and director are required and must be non-empty strings.")
        try:
            with self._database.transaction() as session:
                created = self._repository_factory(session).create(movie)
        except IntegrityError as e:
            logger.warning(f"Duplicate movie '{movie.title}' by '{movie.director}': {e.orig}")
            raise ConflictError(MSG_DUPLICATE_MOVIE) from e
        logger.info(f"Created movie {created.id}: '{created.title}'")
        return created

    def update_movie(self, movie_id: int, changes: Dict[str, Any]) -> Movie:
        movie_id = validate_movie_id(movie_id)
        if not changes:
            raise ValidationError(MSG_NO_UPDATE_FIELDS)
        try:
            with self._database.transaction() as session:
                updated = self._repository_factory(session).update(movie_id, changes)
                if updated is None:
                    raise NotFoundError(MSG_MOVIE_NOT_FOUND)
        except IntegrityError as e:
            logger.warning(f"Update of movie {movie_id} collides with an existing movie: {e.orig}")
            raise ConflictError(MSG_DUPLICATE_MOVIE) from e
        logger.info(f"Updated movie {movie_id}: {sorted(changes)}")
        return updated

    def delete_movie(self, movie_id: int) -> None:
        movie_id = validate_movie_id(movie_id)
        with self._database.transaction() as session:
            deleted = self._repository_factory(session).delete(movie_id)
        if not deleted:
            raise NotFoundError(MSG_MOVIE_NOT_FOUND)
        logger.info(f"Deleted movie {movie_id}")
