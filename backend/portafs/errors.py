"""Error recording and raw diagnostics.

Library calls never raise for OS conditions. They return a sentinel and leave
a message in an ``ErrorRecorder`` for the caller to fetch afterwards. Lower
severity warnings go straight to a ``DiagnosticWriter`` (stderr by default).
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import TextIO

from portafs.config import settings

logger = logging.getLogger(__name__)


class StaleEntryError(RuntimeError):
    """An entry view was read after its iterator moved on or was released."""


class ErrorRecorder:
    """Thread-local storage for the last recorded error message."""

    def __init__(self):
        self._local = threading.local()

    def set_error_msg(self, msg: str) -> None:
        previous = getattr(self._local, "message", None)
        if previous is not None:
            logger.debug("Overwriting unread error message: %s", previous)
        self._local.message = msg
        logger.debug("Recorded error: %s", msg.rstrip("\n"))

    def get_error_string(self) -> str:
        return getattr(self._local, "message", None) or ""

    def is_error_set(self) -> bool:
        return getattr(self._local, "message", None) is not None

    def reset_error(self) -> None:
        self._local.message = None


class DiagnosticWriter:
    """Writes best-effort warnings to a stream without ever raising."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True):
        self._stream = stream
        self.enabled = enabled

    @property
    def stream(self) -> TextIO:
        # Looked up on every write so a replaced sys.stderr is picked up
        return self._stream if self._stream is not None else sys.stderr

    def write(self, msg: str) -> None:
        if not self.enabled:
            return
        if not msg.endswith("\n"):
            msg += "\n"
        try:
            self.stream.write(msg)
            self.stream.flush()
        except (ValueError, OSError) as e:
            logger.debug("Diagnostic stream unavailable (%s): %s", e, msg.rstrip("\n"))


default_recorder = ErrorRecorder()
default_diagnostics = DiagnosticWriter(enabled=settings.diagnostics_enabled)


def get_default_diagnostics() -> DiagnosticWriter:
    return default_diagnostics


def set_error_msg(msg: str) -> None:
    default_recorder.set_error_msg(msg)


def get_error_string() -> str:
    return default_recorder.get_error_string()


def is_error_set() -> bool:
    return default_recorder.is_error_set()


def reset_error() -> None:
    default_recorder.reset_error()
