# app/api/v1/__init__.py

from fastapi import APIRouter
from . import entries, system, users

api_router = APIRouter()

api_router.include_router(entries.router, prefix="/entries", tags=["시청 기록"])
api_router.include_router(system.router, prefix="/system", tags=["시스템"])
api_router.include_router(users.router, prefix="/users", tags=["사용자"])
