"""Path string helpers: join, separator normalisation, home expansion."""

from __future__ import annotations

import os
from typing import Callable, Optional

from portafs.allocator import Allocator, get_default_allocator
from portafs.platform import IS_WINDOWS, PATH_DELIMITER


def get_home_dir() -> Optional[str]:
    """HOME on POSIX, USERPROFILE on Windows; None when unset or empty."""
    value = os.environ.get("USERPROFILE" if IS_WINDOWS else "HOME")
    return value or None


def join_path(
    left_hand_path: Optional[str],
    right_hand_path: Optional[str],
    allocator: Optional[Allocator] = None,
) -> Optional[str]:
    """``left + delimiter + right``, or None if either side is None."""
    if left_hand_path is None or right_hand_path is None:
        return None
    allocator = allocator or get_default_allocator()
    joined = f"{os.fspath(left_hand_path)}{PATH_DELIMITER}{os.fspath(right_hand_path)}"
    return allocator.allocate(lambda: joined)


def to_native_path(path: Optional[str], allocator: Optional[Allocator] = None) -> Optional[str]:
    """Replace every forward slash with the native delimiter."""
    if path is None:
        return None
    allocator = allocator or get_default_allocator()
    native = os.fspath(path).replace("/", PATH_DELIMITER)
    return allocator.allocate(lambda: native)


def expand_user(
    path: Optional[str],
    allocator: Optional[Allocator] = None,
    *,
    home_resolver: Callable[[], Optional[str]] = get_home_dir,
) -> Optional[str]:
    """Substitute a leading ``~`` with the home directory.

    Paths without a leading ``~`` come back unchanged. Returns None when the
    home directory cannot be resolved.
    """
    if path is None:
        return None
    allocator = allocator or get_default_allocator()
    path = os.fspath(path)

    if not path.startswith("~"):
        return allocator.allocate(lambda: path)

    homedir = home_resolver()
    if homedir is None:
        return None
    expanded = f"{homedir}{path[1:]}"
    return allocator.allocate(lambda: expanded)
