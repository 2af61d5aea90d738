"""Data Transfer Objects for movie API responses."""
from dataclasses import dataclass
from decimal import Decimal


@dataclass
class RatingResultDTO:
    """Outcome of a rating submission."""
    movie_id: int
    new_average_rating: Decimal
    new_num_ratings: int


@dataclass
class RatingAggregateDTO:
    """Current rating aggregate for one movie."""
    movie_id: int
    average_rating: Decimal
    num_ratings: int
