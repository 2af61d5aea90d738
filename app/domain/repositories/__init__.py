"""Repository interfaces."""
from app.domain.repositories.movie_repository import MovieRepository

__all__ = [
    "MovieRepository",
]
