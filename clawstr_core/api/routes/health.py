"""Health check route."""

from fastapi import APIRouter

from ..schemas import StatusResponse


def create_health_router() -> APIRouter:
    """Create health router."""
    router = APIRouter(prefix="/api", tags=["health"])

    @router.get("/health", response_model=StatusResponse)
    async def health() -> dict:
        return {"status": "ok"}

    return router
