"""Health check endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> Dict[str, Any]:
    """
    Readiness check for Cloud Run.
    Reports which collaborators this instance was started with.
    """
    generator = request.app.state.text_generator
    return {
        "status": "ready",
        "dependencies": {
            "text_generation": generator.provider,
            "sharing": request.app.state.supabase is not None,
        },
    }
