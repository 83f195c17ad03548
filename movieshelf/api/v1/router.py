from fastapi import APIRouter
from . import movies, categories, directors

api_router = APIRouter()

api_router.include_router(movies.router)
api_router.include_router(categories.router)
api_router.include_router(directors.router)

__all__ = ["api_router"]
