"""Movie repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.domain.value_objects.search_criteria import SearchCriteria
from app.domain.entities.movie import Movie
from app.domain.value_objects.rating import RatingAggregate


class MovieRepository(ABC):
    """Repository interface for Movie entity.

    Implementations are bound to one unit of work (transaction); callers
    open the transaction and hand the repository its session.
    """

    @abstractmethod
    def list_all(self) -> List[Movie]:
        """List every movie ordered by id."""
        pass

    @abstractmethod
    def search(self, criteria: SearchCriteria) -> List[Movie]:
        """List movies matching all given criteria."""
        pass

    @abstractmethod
    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """Get movie by ID."""
        pass

    @abstractmethod
    def create(self, movie: Movie) -> Movie:
        """Create new movie, assigning its id."""
        pass

    @abstractmethod
    def update(self, movie_id: int, changes: Dict[str, Any]) -> Optional[Movie]:
        """Apply a partial update; None if the movie does not exist."""
        pass

    @abstractmethod
    def delete(self, movie_id: int) -> bool:
        """Delete movie; False if it did not exist."""
        pass

    @abstractmethod
    def get_aggregate(self, movie_id: int) -> Optional[RatingAggregate]:
        """Read the rating aggregate without locking."""
        pass

    @abstractmethod
    def lock_aggregate(self, movie_id: int) -> Optional[RatingAggregate]:
        """Read the rating aggregate, holding a row lock until the transaction ends."""
        pass

    @abstractmethod
    def save_aggregate(self, movie_id: int, aggregate: RatingAggregate) -> None:
        """Overwrite the rating aggregate columns."""
        pass
