from fastapi import APIRouter

from app.api.routes import generation, models


api_router = APIRouter()

api_router.include_router(generation.router)
api_router.include_router(models.router)
