"""Filesystem routes — listing, metadata, directory size, mkdir, cwd."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from portafs import metadata
from portafs.allocator import Allocator
from portafs.api.deps import get_allocator, get_diagnostics, get_enumerator, get_recorder
from portafs.config import settings
from portafs.directory import calculate_directory_size, get_cwd, mkdir
from portafs.errors import DiagnosticWriter, ErrorRecorder
from portafs.iterator import AdvanceResult, dir_iter_start
from portafs.paths import join_path
from portafs.platform.base import DOT_ENTRIES, DirectoryEnumerator
from portafs.schemas.files import (
    CwdResponse,
    DirectoryListing,
    DirectorySize,
    EntryItem,
    MkdirRequest,
    MkdirResponse,
    PathInfo,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _describe_entry(directory: str, name: str, allocator: Allocator) -> EntryItem:
    if name in DOT_ENTRIES:
        return EntryItem(name=name, is_directory=True)

    entry_path = join_path(directory, name, allocator)
    if entry_path is None:
        return EntryItem(name=name)
    try:
        is_file = metadata.is_file(entry_path)
        return EntryItem(
            name=name,
            is_directory=metadata.is_directory(entry_path),
            is_file=is_file,
            size_bytes=metadata.get_file_size(entry_path) if is_file else 0,
        )
    finally:
        allocator.deallocate(entry_path)


@router.get("/list", response_model=DirectoryListing)
async def list_directory(
    path: str,
    allocator: Allocator = Depends(get_allocator),
    enumerator: DirectoryEnumerator = Depends(get_enumerator),
    recorder: ErrorRecorder = Depends(get_recorder),
):
    """Immediate entries of a directory, in enumeration order."""
    iterator = dir_iter_start(path, allocator, enumerator=enumerator, recorder=recorder)
    if iterator is None:
        raise HTTPException(404, recorder.get_error_string().strip() or f"Can't open directory {path}")

    listing = DirectoryListing(path=path)
    with iterator:
        while iterator.entry_name is not None:
            listing.entries.append(_describe_entry(path, iterator.entry_name, allocator))
            result = iterator.advance()
            if result is AdvanceResult.ERROR:
                listing.complete = False
                listing.error = str(iterator.last_error)
                logger.warning("Listing of %s cut short: %s", path, listing.error)

    return listing


@router.get("/stat", response_model=PathInfo)
async def stat_path(path: str):
    """Every metadata predicate for a path. Missing paths report all false."""
    is_file = metadata.is_file(path)
    return PathInfo(
        path=path,
        exists=metadata.exists(path),
        is_directory=metadata.is_directory(path),
        is_file=is_file,
        is_readable=metadata.is_readable(path),
        is_writable=metadata.is_writable(path),
        is_readable_and_writable=metadata.is_readable_and_writable(path),
        size_bytes=metadata.get_file_size(path) if is_file else 0,
    )


@router.get("/size", response_model=DirectorySize)
async def directory_size(
    path: str,
    allocator: Allocator = Depends(get_allocator),
    enumerator: DirectoryEnumerator = Depends(get_enumerator),
    diagnostics: DiagnosticWriter = Depends(get_diagnostics),
):
    """Non-recursive sum of the file sizes directly inside a directory."""
    if not metadata.is_directory(path):
        raise HTTPException(400, f"Path is not a directory: {path}")
    size = calculate_directory_size(
        path, allocator, enumerator=enumerator, diagnostics=diagnostics,
    )
    return DirectorySize(path=path, size_bytes=size)


@router.post("/mkdir", response_model=MkdirResponse)
async def make_directory(body: MkdirRequest):
    """Create one directory level; the path must be absolute."""
    if not mkdir(body.path):
        raise HTTPException(400, f"Could not create directory: {body.path}")
    logger.info("Directory ready: %s", body.path)
    return MkdirResponse(path=body.path, created=True)


@router.get("/cwd", response_model=CwdResponse)
async def current_directory():
    cwd = get_cwd(settings.cwd_max_length)
    if cwd is None:
        raise HTTPException(500, "Current working directory unavailable")
    return CwdResponse(cwd=cwd)
