"""Input checks shared by the application services."""
from typing import Any

from app.constants import MAX_INT_COLUMN, MSG_INVALID_MOVIE_ID, MSG_MOVIE_NOT_FOUND
from app.core.exceptions import NotFoundError, ValidationError


def validate_movie_id(movie_id: Any) -> int:
    """Return the id if it is a positive integer, else raise ValidationError.

    Ids beyond the INT column range cannot name a stored movie and raise
    NotFoundError without touching the store.
    """
    if isinstance(movie_id, bool) or not isinstance(movie_id, int) or movie_id <= 0:
        raise ValidationError(MSG_INVALID_MOVIE_ID)
    if movie_id > MAX_INT_COLUMN:
        raise NotFoundError(MSG_MOVIE_NOT_FOUND)
    return movie_id
