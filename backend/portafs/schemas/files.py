"""Filesystem schemas — directory listings, metadata, sizes."""

from pydantic import BaseModel


class EntryItem(BaseModel):
    """One directory entry, dot entries included."""
    name: str
    is_directory: bool = False
    is_file: bool = False
    size_bytes: int = 0


class DirectoryListing(BaseModel):
    path: str
    entries: list[EntryItem] = []
    complete: bool = True  # False if a read error cut the listing short
    error: str | None = None


class PathInfo(BaseModel):
    """Result of every metadata predicate for one path."""
    path: str
    exists: bool
    is_directory: bool
    is_file: bool
    is_readable: bool
    is_writable: bool
    is_readable_and_writable: bool
    size_bytes: int


class DirectorySize(BaseModel):
    path: str
    size_bytes: int


class MkdirRequest(BaseModel):
    path: str


class MkdirResponse(BaseModel):
    path: str
    created: bool


class CwdResponse(BaseModel):
    cwd: str
