# app/models/movie.py

from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from app.database import Base


class MovieModel(Base):
    __tablename__ = "movies"

    movie_id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    release_date = Column(Date, nullable=True)
    runtime = Column(Integer, nullable=True, comment="상영 시간(분)")
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp()
    )

    def __repr__(self):
        return f"<MovieModel(movie_id={self.movie_id}, title='{self.title}')>"
