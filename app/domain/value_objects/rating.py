"""Rating value objects - immutable and validated."""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from numbers import Number
from typing import Any

from app.constants import (
    MAX_RATING,
    MIN_RATING,
    MSG_INVALID_RATING,
    RATING_QUANTUM,
    ZERO_AVERAGE,
)
from app.core.exceptions import InvalidRatingError


def round_rating(value: Decimal) -> Decimal:
    """Round to two fractional digits, half away from zero."""
    return value.quantize(RATING_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Rating:
    """A single submitted rating, an integer in [MIN_RATING, MAX_RATING]."""
    value: int

    def __post_init__(self):
        """Validate rating."""
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidRatingError(MSG_INVALID_RATING)
        if self.value < MIN_RATING or self.value > MAX_RATING:
            raise InvalidRatingError(MSG_INVALID_RATING)

    @classmethod
    def parse(cls, raw: Any) -> "Rating":
        """Build a Rating from untrusted input.

        Integral floats such as ``4.0`` are accepted; booleans, strings,
        ``None`` and fractional numbers are not.
        """
        if isinstance(raw, bool) or not isinstance(raw, Number):
            raise InvalidRatingError(MSG_INVALID_RATING)
        if isinstance(raw, float):
            if not raw.is_integer():
                raise InvalidRatingError(MSG_INVALID_RATING)
            raw = int(raw)
        if not isinstance(raw, int):
            raise InvalidRatingError(MSG_INVALID_RATING)
        return cls(raw)


@dataclass(frozen=True)
class RatingAggregate:
    """Running aggregate of every rating submitted for one movie.

    The exact integer total is kept alongside the count so the displayed
    average never drifts from the true mean.
    """
    rating_total: int = 0
    num_ratings: int = 0

    def __post_init__(self):
        if self.num_ratings < 0:
            raise ValueError(f"Rating count cannot be negative, got {self.num_ratings}")
        if self.rating_total < 0:
            raise ValueError(f"Rating total cannot be negative, got {self.rating_total}")

    @property
    def average_rating(self) -> Decimal:
        if self.num_ratings == 0:
            return ZERO_AVERAGE
        return round_rating(Decimal(self.rating_total) / Decimal(self.num_ratings))

    def fold(self, rating: Rating) -> "RatingAggregate":
        """Return the aggregate with one more rating applied."""
        return RatingAggregate(
            rating_total=self.rating_total + rating.value,
            num_ratings=self.num_ratings + 1,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "average_rating": float(self.average_rating),
            "num_ratings": self.num_ratings,
        }
