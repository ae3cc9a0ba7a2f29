"""Single-probe metadata predicates.

Every query performs one ``os.stat`` and folds any failure (missing path,
permission denied, bad argument) into ``False`` or ``0``. A missing path and
an unreadable one look the same to the caller.
"""

from __future__ import annotations

import os
import stat
from typing import Optional

from portafs.errors import DiagnosticWriter, get_default_diagnostics


def _probe(path) -> Optional[os.stat_result]:
    if path is None:
        return None
    try:
        return os.stat(path)
    except (OSError, ValueError, TypeError):
        # ValueError: embedded NUL byte, TypeError: not path-like
        return None


def exists(path) -> bool:
    return _probe(path) is not None


def is_directory(path) -> bool:
    st = _probe(path)
    return st is not None and stat.S_ISDIR(st.st_mode)


def is_file(path) -> bool:
    st = _probe(path)
    return st is not None and stat.S_ISREG(st.st_mode)


def is_readable(path) -> bool:
    st = _probe(path)
    return st is not None and bool(st.st_mode & stat.S_IRUSR)


def is_writable(path) -> bool:
    st = _probe(path)
    return st is not None and bool(st.st_mode & stat.S_IWUSR)


def is_readable_and_writable(path) -> bool:
    # On Windows every writable file is readable, so this matches is_writable there
    st = _probe(path)
    return st is not None and bool(st.st_mode & stat.S_IRUSR) and bool(st.st_mode & stat.S_IWUSR)


def get_file_size(path, *, diagnostics: Optional[DiagnosticWriter] = None) -> int:
    """Byte size of a regular file, 0 (plus a diagnostic) for anything else."""
    if not is_file(path):
        (diagnostics or get_default_diagnostics()).write(f"Path is not a file: {path}")
        return 0

    st = _probe(path)
    return st.st_size if st is not None else 0
