"""SQLAlchemy models for the catalog tables."""
from sqlalchemy import (
    Column,
    DECIMAL,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from app.infrastructure.persistence.db import Base


class Movie(Base):
    __tablename__ = "movies"
    __table_args__ = (
        UniqueConstraint("title", "director", name="uq_movies_title_director"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    director = Column(String(255), nullable=False)
    year = Column(Integer)
    genre = Column(String(255))
    description = Column(Text)
    poster_url = Column(String(255))
    # Aggregate columns; only the rating aggregator writes these
    average_rating = Column(DECIMAL(3, 2), nullable=False, default=0, server_default="0.00")
    num_ratings = Column(Integer, nullable=False, default=0, server_default="0")
    rating_total = Column(Integer, nullable=False, default=0, server_default="0")
