"""Pydantic schemas for movie API requests and responses."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, field_validator, ValidationInfo

from app.constants import MAX_INT_COLUMN, MAX_VARCHAR_LENGTH_SHORT, POSTER_URL_PATTERN


# Request Schemas
class MovieUpdateSchema(BaseModel):
    """Partial movie update; only the fields sent are changed."""
    title: Optional[StrictStr] = None
    director: Optional[StrictStr] = None
    year: Optional[StrictInt] = None
    genre: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    poster_url: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "director", "genre", "description")
    @classmethod
    def require_non_empty_text(cls, value: Optional[str], info: ValidationInfo) -> str:
        label = info.field_name.capitalize()
        if value is None or not value.strip():
            raise ValueError(f"{label} must be a non-empty string.")
        if info.field_name != "description" and len(value) > MAX_VARCHAR_LENGTH_SHORT:
            raise ValueError(f"{label} must be at most {MAX_VARCHAR_LENGTH_SHORT} characters.")
        return value

    @field_validator("year")
    @classmethod
    def require_positive_year(cls, value: Optional[int]) -> int:
        if value is None or not 0 < value <= MAX_INT_COLUMN:
            raise ValueError("Year must be a positive integer.")
        return value

    @field_validator("poster_url")
    @classmethod
    def require_image_url(cls, value: Optional[str]) -> str:
        if value is None or not POSTER_URL_PATTERN.match(value) or len(value) > MAX_VARCHAR_LENGTH_SHORT:
            raise ValueError("Poster URL must be a valid image URL (http/https).")
        return value


class MovieCreateSchema(MovieUpdateSchema):
    """New movie; title and director are required."""
    title: StrictStr
    director: StrictStr


class RatingRequestSchema(BaseModel):
    """Rating submission body. The value is checked by the rating aggregator."""
    rating: Any = None


# Response Schemas
class MovieSchema(BaseModel):
    """Movie record as exposed by the API."""
    id: int
    title: str
    director: str
    year: Optional[int] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    poster_url: Optional[str] = None
    average_rating: float = 0.0
    num_ratings: int = 0

    model_config = ConfigDict(from_attributes=True)


class RatingResponseSchema(BaseModel):
    """Rating submission result."""
    message: str = "Movie rated successfully."
    new_average_rating: float
    new_num_ratings: int


class RatingAggregateSchema(BaseModel):
    """Current aggregate of a movie."""
    movie_id: int
    average_rating: float
    num_ratings: int

    model_config = ConfigDict(from_attributes=True)


class MessageSchema(BaseModel):
    message: str
