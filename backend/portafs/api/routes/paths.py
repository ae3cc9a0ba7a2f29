"""Path utility routes — join, native separators, home expansion."""

from fastapi import APIRouter, Depends, HTTPException

from portafs.allocator import Allocator
from portafs.api.deps import get_allocator
from portafs.paths import expand_user, join_path, to_native_path
from portafs.schemas.paths import JoinRequest, PathRequest, PathResponse

router = APIRouter()


@router.post("/join", response_model=PathResponse)
async def join(body: JoinRequest, allocator: Allocator = Depends(get_allocator)):
    joined = join_path(body.left, body.right, allocator)
    if joined is None:
        raise HTTPException(400, "Could not join paths")
    return PathResponse(path=joined)


@router.post("/native", response_model=PathResponse)
async def native(body: PathRequest, allocator: Allocator = Depends(get_allocator)):
    converted = to_native_path(body.path, allocator)
    if converted is None:
        raise HTTPException(400, "Could not convert path")
    return PathResponse(path=converted)


@router.post("/expand", response_model=PathResponse)
async def expand(body: PathRequest, allocator: Allocator = Depends(get_allocator)):
    """Expand a leading ~ to the home directory."""
    expanded = expand_user(body.path, allocator)
    if expanded is None:
        raise HTTPException(400, "Home directory could not be resolved")
    return PathResponse(path=expanded)
