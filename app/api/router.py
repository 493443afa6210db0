from fastapi import APIRouter

from app.api.endpoints import auth, health, proposals, topics

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(topics.router)
api_router.include_router(proposals.router)
