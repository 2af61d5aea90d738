"""Movie API routes - thin layer delegating to services.

Handlers are plain functions: FastAPI runs each request in its worker
thread pool, so a blocking store call only holds up its own request.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.v1.schemas.movie_schemas import (
    MessageSchema,
    MovieCreateSchema,
    MovieSchema,
    MovieUpdateSchema,
    RatingAggregateSchema,
    RatingRequestSchema,
    RatingResponseSchema,
)
from app.application.services.catalog_service import CatalogService
from app.application.services.rating_aggregator import RatingAggregator
from app.core.dependencies import get_catalog_service, get_rating_aggregator
from app.domain.entities.movie import Movie

router = APIRouter(prefix="/movies", tags=["movies"])


def _to_schema(movie: Movie) -> MovieSchema:
    return MovieSchema.model_validate(movie)


# /search must be registered before /{movie_id}
@router.get("/search", response_model=List[MovieSchema])
def search_movies(
    title: Optional[str] = Query(None, description="Substring of the title"),
    director: Optional[str] = Query(None, description="Substring of the director"),
    genre: Optional[str] = Query(None, description="Substring of the genre"),
    year: Optional[str] = Query(None, description="Exact release year"),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Search movies by title, director, genre or year.

    At least one criterion is required; all given criteria must match.
    """
    movies = service.search_movies(title=title, director=director, genre=genre, year=year)
    return [_to_schema(m) for m in movies]


@router.get("", response_model=List[MovieSchema])
def list_movies(service: CatalogService = Depends(get_catalog_service)):
    """List every movie in the catalog."""
    return [_to_schema(m) for m in service.list_movies()]


@router.get("/{movie_id}", response_model=MovieSchema)
def get_movie(movie_id: int, service: CatalogService = Depends(get_catalog_service)):
    """Get one movie by ID."""
    return _to_schema(service.get_movie(movie_id))


@router.post("", response_model=MovieSchema, status_code=status.HTTP_201_CREATED)
def create_movie(
    payload: MovieCreateSchema,
    service: CatalogService = Depends(get_catalog_service),
):
    """Add a new movie. Its rating starts at 0.00 with no ratings."""
    return _to_schema(service.create_movie(payload.model_dump()))


@router.put("/{movie_id}", response_model=MovieSchema)
def update_movie(
    movie_id: int,
    payload: MovieUpdateSchema,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update the fields present in the body; others are left as they are."""
    return _to_schema(service.update_movie(movie_id, payload.model_dump(exclude_unset=True)))


@router.delete("/{movie_id}", response_model=MessageSchema)
def delete_movie(movie_id: int, service: CatalogService = Depends(get_catalog_service)):
    """Remove a movie."""
    service.delete_movie(movie_id)
    return MessageSchema(message="Movie deleted successfully.")


@router.post("/{movie_id}/rate", response_model=RatingResponseSchema)
def rate_movie(
    movie_id: int,
    payload: RatingRequestSchema,
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
):
    """
    Rate a movie from 1 to 5.

    Returns the movie's new average rating and rating count.
    """
    result = aggregator.submit_rating(movie_id, payload.rating)
    return RatingResponseSchema(
        new_average_rating=result.new_average_rating,
        new_num_ratings=result.new_num_ratings,
    )


@router.get("/{movie_id}/rating", response_model=RatingAggregateSchema)
def get_movie_rating(
    movie_id: int,
    aggregator: RatingAggregator = Depends(get_rating_aggregator),
):
    """Get a movie's current average rating and rating count."""
    return RatingAggregateSchema.model_validate(aggregator.get_aggregate(movie_id))
