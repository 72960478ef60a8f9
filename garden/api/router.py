from fastapi import APIRouter

from garden.api.routes import measurements, stats

api_router = APIRouter()
api_router.include_router(measurements.router, tags=["measurements"])
api_router.include_router(stats.router, tags=["stats"])
