"""Directory-level operations: creation, size aggregation, working directory."""

from __future__ import annotations

import logging
import os
from typing import Optional

from portafs.allocator import Allocator, get_default_allocator
from portafs.config import settings
from portafs.errors import DiagnosticWriter, get_default_diagnostics
from portafs.iterator import dir_iter_end, dir_iter_start
from portafs.metadata import get_file_size, is_directory
from portafs.paths import join_path
from portafs.platform import IS_WINDOWS
from portafs.platform.base import DOT_ENTRIES, DirectoryEnumerator

logger = logging.getLogger(__name__)


def mkdir(abs_path, *, mode: Optional[int] = None) -> bool:
    """Create one directory level at an absolute path.

    An existing directory counts as success. Parents are not created.
    """
    if abs_path is None:
        return False
    abs_path = os.fspath(abs_path)
    if abs_path == "":
        return False

    # TODO: validate absoluteness on Windows too (drive letter or UNC prefix)
    if not IS_WINDOWS and not abs_path.startswith("/"):
        return False

    try:
        os.mkdir(abs_path, settings.mkdir_mode if mode is None else mode)
    except FileExistsError:
        return is_directory(abs_path)
    except (OSError, ValueError) as e:
        logger.debug("mkdir %s failed: %s", abs_path, e)
        return False
    return True


def calculate_directory_size(
    directory_path,
    allocator: Optional[Allocator] = None,
    *,
    enumerator: Optional[DirectoryEnumerator] = None,
    diagnostics: Optional[DiagnosticWriter] = None,
) -> int:
    """Sum the sizes of the regular files directly inside ``directory_path``.

    Not recursive: subdirectories contribute nothing.
    """
    diagnostics = diagnostics or get_default_diagnostics()
    allocator = allocator or get_default_allocator()
    dir_size = 0

    if not is_directory(directory_path):
        diagnostics.write(f"Path is not a directory: {directory_path}")
        return dir_size

    iterator = dir_iter_start(directory_path, allocator, enumerator=enumerator)
    try:
        if iterator is None:
            return dir_size
        for entry_name in iterator:
            if entry_name in DOT_ENTRIES:
                continue
            file_path = join_path(iterator.path, entry_name, allocator)
            if file_path is None:
                continue
            dir_size += get_file_size(file_path, diagnostics=diagnostics)
            allocator.deallocate(file_path)
    finally:
        dir_iter_end(iterator)

    logger.debug("Directory %s holds %d bytes", directory_path, dir_size)
    return dir_size


def get_cwd(max_length: int) -> Optional[str]:
    """Current working directory if it fits in ``max_length`` bytes (NUL included)."""
    if max_length is None or max_length <= 0:
        return None
    try:
        cwd = os.getcwd()
    except OSError as e:
        logger.debug("getcwd failed: %s", e)
        return None
    if len(os.fsencode(cwd)) + 1 > max_length:
        return None
    return cwd
