"""Movie domain entity - pure business logic."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from app.domain.value_objects.rating import RatingAggregate


@dataclass
class Movie:
    """Movie domain entity."""
    id: Optional[int]
    title: str
    director: str
    year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    rating: RatingAggregate = field(default_factory=RatingAggregate)

    @property
    def average_rating(self) -> Decimal:
        return self.rating.average_rating

    @property
    def num_ratings(self) -> int:
        return self.rating.num_ratings

    def is_valid(self) -> bool:
        """Validate movie business rules."""
        return bool(
            self.title and
            self.title.strip() and
            self.director and
            self.director.strip() and
            (self.year is None or self.year > 0)
        )
