"""Health check."""

from fastapi import APIRouter, Depends

from portafs import __version__
from portafs.api.deps import get_enumerator
from portafs.platform.base import DirectoryEnumerator
from portafs.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(enumerator: DirectoryEnumerator = Depends(get_enumerator)):
    """Lightweight liveness check, reports the active enumeration variant."""
    return HealthResponse(version=__version__, platform=enumerator.name)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
