# app/models/user.py

from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Boolean
from sqlalchemy.sql import func
from app.database import Base

class UserModel(Base):
    __tablename__ = "users"

    user_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    total_points = Column(Integer, nullable=False, default=0, server_default="0")
    try_hard_mode = Column(Boolean, nullable=False, default=False, server_default="0")
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp())

    def __repr__(self):
        return f"<UserModel(id={self.user_id}, points={self.total_points})>"
