"""API route registration."""

from fastapi import APIRouter

from portafs.api.routes import files, health, paths

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, prefix="/fs", tags=["fs"])
api_router.include_router(paths.router, prefix="/paths", tags=["paths"])
