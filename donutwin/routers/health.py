"""Health check router for DonutWin."""

from fastapi import APIRouter

from donutwin.config import settings
from donutwin.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return {"status": "ok", "env": settings.app_env, "version": settings.app_version}
