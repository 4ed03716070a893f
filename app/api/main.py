from fastapi import APIRouter

from .endpoints.health import router as health_router
from .endpoints.mix import router as mix_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "Momentmix API is running"}


api_router.include_router(mix_router)
api_router.include_router(health_router)
