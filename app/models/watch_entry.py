# app/models/watch_entry.py

from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    SmallInteger,
    DateTime,
    UniqueConstraint,
    ForeignKey,
    Index,
)
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from app.database import Base


class WatchEntryModel(Base):
    __tablename__ = "watch_entries"

    entry_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id = Column(BigInteger, ForeignKey("users.user_id"), nullable=False)
    movie_id = Column(Integer, ForeignKey("movies.movie_id"), nullable=False)
    watchtime_minutes = Column(Integer, nullable=False, comment="기록 시점의 상영 시간(분)")
    rating = Column(SmallInteger, nullable=True, comment="별점 1~5")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    can_rate_after = Column(DateTime, nullable=True, comment="트라이하드 모드 평가 가능 시각")
    watchtime_awarded_at = Column(DateTime, nullable=True, comment="시청 포인트 정산 시각")
    points_earned = Column(Integer, nullable=False, default=0)
    watchtime_points = Column(Integer, nullable=False, default=0)
    rating_points = Column(Integer, nullable=False, default=0)

    movie = relationship("MovieModel", lazy="joined")

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="unique_user_movie"),
        Index("idx_watch_entries_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<WatchEntryModel(user_id={self.user_id}, movie_id={self.movie_id}, points={self.points_earned})>"
