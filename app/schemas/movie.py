# app/schemas/movie.py

from typing import Optional
from pydantic import BaseModel, Field
from datetime import date


class Movie(BaseModel):
    movie_id: int = Field(description="영화 ID")
    title: str = Field(description="영화 제목")
    release_date: Optional[date] = Field(default=None, description="개봉일")
    runtime: Optional[int] = Field(default=None, description="상영시간(분)")

    class Config:
        from_attributes = True
