"""
Liveness endpoint for load balancers and uptime monitors
"""
from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    """Basic liveness - the process is up and serving requests"""
    return {"status": "ok", "message": "Server is running"}
