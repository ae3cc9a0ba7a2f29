"""Platform detection and enumeration variant selection.

The delimiter always follows the running OS. The enumeration variant follows
``settings.platform`` so the Windows control flow can be exercised anywhere.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portafs.platform.base import DirectoryEnumerator

IS_WINDOWS = os.name == "nt"
IS_POSIX = not IS_WINDOWS

PATH_DELIMITER = "\\" if IS_WINDOWS else "/"


def get_enumerator(platform: str | None = None) -> DirectoryEnumerator:
    """Return the enumeration variant for ``platform`` (posix/windows/auto)."""
    from portafs.config import settings
    from portafs.platform.posix import PosixEnumerator
    from portafs.platform.windows import WindowsEnumerator

    choice = (platform or settings.platform).lower()
    if choice == "auto":
        choice = "windows" if IS_WINDOWS else "posix"
    if choice == "windows":
        return WindowsEnumerator()
    if choice == "posix":
        return PosixEnumerator()
    raise ValueError(f"Unknown platform: {platform}")


__all__ = ["IS_POSIX", "IS_WINDOWS", "PATH_DELIMITER", "get_enumerator"]
