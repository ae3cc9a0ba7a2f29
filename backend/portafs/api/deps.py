"""FastAPI dependency injection — allocator, enumerator, diagnostics."""

from __future__ import annotations

from portafs.allocator import Allocator, get_default_allocator
from portafs.errors import DiagnosticWriter, ErrorRecorder, get_default_diagnostics
from portafs.platform import get_enumerator as _platform_enumerator
from portafs.platform.base import DirectoryEnumerator


def get_allocator() -> Allocator:
    return get_default_allocator()


def get_enumerator() -> DirectoryEnumerator:
    """Enumeration variant selected by settings.platform."""
    return _platform_enumerator()


def get_recorder() -> ErrorRecorder:
    """Fresh recorder per request so messages never leak between requests."""
    return ErrorRecorder()


def get_diagnostics() -> DiagnosticWriter:
    return get_default_diagnostics()
