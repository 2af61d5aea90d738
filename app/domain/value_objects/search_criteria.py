"""Search criteria value object - immutable and validated."""
from dataclasses import dataclass
from typing import Optional, Any

from app.constants import MAX_INT_COLUMN, MSG_INVALID_SEARCH_YEAR, MSG_NO_SEARCH_CRITERIA
from app.core.exceptions import ValidationError


def _clean(value: Optional[str]) -> Optional[str]:
    """Treat empty strings as absent."""
    if value is None or value == "":
        return None
    return value


@dataclass(frozen=True)
class SearchCriteria:
    """Movie search filters; every given filter must match."""
    title: Optional[str] = None
    director: Optional[str] = None
    genre: Optional[str] = None
    year: Optional[int] = None

    def __post_init__(self):
        """Validate criteria."""
        if self.year is not None and not 0 < self.year <= MAX_INT_COLUMN:
            raise ValidationError(MSG_INVALID_SEARCH_YEAR)
        if self.is_empty():
            raise ValidationError(MSG_NO_SEARCH_CRITERIA)

    def is_empty(self) -> bool:
        return (
            self.title is None and
            self.director is None and
            self.genre is None and
            self.year is None
        )

    @classmethod
    def from_query(
        cls,
        title: Optional[str] = None,
        director: Optional[str] = None,
        genre: Optional[str] = None,
        year: Optional[Any] = None,
    ) -> "SearchCriteria":
        """Build criteria from raw query-string values."""
        parsed_year = None
        year = _clean(year) if isinstance(year, str) else year
        if year is not None:
            try:
                parsed_year = int(year)
            except (TypeError, ValueError):
                raise ValidationError(MSG_INVALID_SEARCH_YEAR)
        return cls(
            title=_clean(title),
            director=_clean(director),
            genre=_clean(genre),
            year=parsed_year,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary, omitting absent filters."""
        return {
            key: value
            for key, value in (
                ("title", self.title),
                ("director", self.director),
                ("genre", self.genre),
                ("year", self.year),
            )
            if value is not None
        }
