# app/tests/conftest.py
import os
from datetime import datetime

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DAY_TIMEZONE"] = "UTC"
os.environ["ENABLE_UNLOCK_SWEEP_SCHEDULER"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.models import MovieModel, UserModel

NOW = datetime(2026, 10, 17, 12, 0, 0)


@pytest.fixture
def engine():
    # in-memory DB shared by every session of one test
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(bind=eng)
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(try_hard_mode: bool = False, total_points: int = 0) -> UserModel:
        counter["n"] += 1
        user = UserModel(
            email=f"user{counter['n']}@example.com",
            name=f"user{counter['n']}",
            try_hard_mode=try_hard_mode,
            total_points=total_points,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_movie(db):
    def _make(movie_id: int, runtime, title: str = "movie") -> MovieModel:
        movie = MovieModel(movie_id=movie_id, title=f"{title} {movie_id}", runtime=runtime)
        db.add(movie)
        db.commit()
        return movie

    return _make


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def points_of(db):
    def _points(user_id: int) -> int:
        db.expire_all()
        return db.get(UserModel, user_id).total_points

    return _points
