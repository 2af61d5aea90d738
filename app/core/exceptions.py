"""Catalog error taxonomy.

Services raise these; the API layer maps each kind to an HTTP status code
(see app/api/errors.py).
"""


class CatalogError(Exception):
    """Base class for all catalog errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Malformed input (bad id, bad field value, missing criteria)."""


class InvalidRatingError(ValidationError):
    """Rating is not an integer in the accepted range."""


class NotFoundError(CatalogError):
    """Referenced movie does not exist."""


class ConflictError(CatalogError):
    """Uniqueness violation on (title, director)."""


class StoreUnavailableError(CatalogError):
    """Connection, pool or transaction failure in the backing store."""
