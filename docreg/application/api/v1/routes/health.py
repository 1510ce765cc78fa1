"""Health check endpoint."""

from fastapi import APIRouter

from docreg import __version__

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
    }
