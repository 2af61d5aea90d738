"""Rating aggregation service.

Folds each submitted rating into the movie's running aggregate. The
read-compute-write sequence runs inside one transaction holding the movie's
row lock, so concurrent submissions to the same movie are applied one after
another and none is lost. Submissions to different movies do not contend.
"""
import logging
from typing import Any, Callable

from sqlalchemy.orm import Session

from app.application.dto.movie_dto import RatingAggregateDTO, RatingResultDTO
from app.application.services.validation import validate_movie_id
from app.constants import MSG_MOVIE_NOT_FOUND
from app.core.exceptions import NotFoundError
from app.domain.repositories.movie_repository import MovieRepository
from app.domain.value_objects.rating import Rating
from app.infrastructure.persistence.db import Database
from app.infrastructure.persistence.repositories.sqlalchemy_movie_repository import (
    SQLAlchemyMovieRepository,
)

logger = logging.getLogger(__name__)


class RatingAggregator:
    """Maintains the average rating and rating count of each movie."""

    def __init__(
        self,
        database: Database,
        repository_factory: Callable[[Session], MovieRepository] = SQLAlchemyMovieRepository,
    ):
        self._database = database
        self._repository_factory = repository_factory

    def submit_rating(self, movie_id: int, rating: Any) -> RatingResultDTO:
        """Apply one rating to a movie's aggregate.

        Args:
            movie_id: Movie to rate
            rating: Integer in [1, 5]

        Returns:
            RatingResultDTO with the new average and count

        Raises:
            ValidationError: movie_id is not a positive integer
            InvalidRatingError: rating is not an integer in range
            NotFoundError: movie does not exist
            StoreUnavailableError: the store failed; nothing was written
        """
        movie_id = validate_movie_id(movie_id)
        value = Rating.parse(rating)

        with self._database.transaction() as session:
            repo = self._repository_factory(session)
            current = repo.lock_aggregate(movie_id)
            if current is None:
                raise NotFoundError(MSG_MOVIE_NOT_FOUND)
            updated = current.fold(value)
            repo.save_aggregate(movie_id, updated)

        logger.info(
            f"Movie {movie_id} rated {value.value}: "
            f"average {updated.average_rating} over {updated.num_ratings} rating(s)"
        )
        return RatingResultDTO(
            movie_id=movie_id,
            new_average_rating=updated.average_rating,
            new_num_ratings=updated.num_ratings,
        )

    def get_aggregate(self, movie_id: int) -> RatingAggregateDTO:
        """Read the latest committed aggregate for a movie."""
        movie_id = validate_movie_id(movie_id)
        with self._database.transaction() as session:
            aggregate = self._repository_factory(session).get_aggregate(movie_id)
        if aggregate is None:
            raise NotFoundError(MSG_MOVIE_NOT_FOUND)
        return RatingAggregateDTO(
            movie_id=movie_id,
            average_rating=aggregate.average_rating,
            num_ratings=aggregate.num_ratings,
        )
