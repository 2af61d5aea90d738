"""Application constants that never change across environments.

These are fixed business rules of the catalog and should never vary
between dev/staging/prod.
"""
import re
from decimal import Decimal

# ===== Rating Rules =====
MIN_RATING = 1
MAX_RATING = 5
RATING_DECIMAL_PLACES = 2
RATING_QUANTUM = Decimal("0.01")
ZERO_AVERAGE = Decimal("0.00")

# ===== Validation Patterns =====
POSTER_URL_PATTERN = re.compile(
    r"^https?://.+\.(jpg|jpeg|png|gif|bmp|webp)$",
    re.IGNORECASE,
)

# ===== Database Constraints =====
MAX_INT_COLUMN = 2**31 - 1  # largest value a signed INT column holds
MAX_VARCHAR_LENGTH_SHORT = 255

# ===== Error Messages =====
MSG_INVALID_MOVIE_ID = "Invalid movie ID. Must be a positive number."
MSG_INVALID_RATING = "Rating must be an integer between 1 and 5."
MSG_MOVIE_NOT_FOUND = "Movie not found."
MSG_DUPLICATE_MOVIE = "A movie with this title and director already exists."
MSG_NO_SEARCH_CRITERIA = (
    "Please provide at least one search criterion (title, director, genre, or year)."
)
MSG_INVALID_SEARCH_YEAR = "Search year must be a positive integer."
MSG_NO_UPDATE_FIELDS = "No fields provided for update."
