from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, Optional

# Names readdir and FindFirstFile report but os.scandir filters out
DOT_ENTRIES = (".", "..")


class EnumerationError(Exception):
    """An OS call failed while opening or reading a directory."""

    def __init__(self, action: str, path: str, code: Optional[int]):
        self.action = action
        self.path = path
        self.code = code
        super().__init__(f"Can't {action} directory {path}. Error code: {code}")


@dataclass
class EnumerationState:
    """Zero-initialised platform state owned by one iterator."""
    handle: Optional[Iterator] = None
    path: str = ""
    pending: deque = field(default_factory=deque)


def os_error_code(exc: OSError) -> Optional[int]:
    """Native error code: winerror when the OS supplies one, else errno."""
    winerror = getattr(exc, "winerror", None)
    if winerror is not None:
        return winerror
    return exc.errno


class DirectoryEnumerator(ABC):
    """
    Contract for one platform's directory enumeration protocol.
    The portable iterator drives it through open_first / read_next / release.
    """

    name: str = "abstract"

    def new_state(self) -> EnumerationState:
        return EnumerationState()

    @abstractmethod
    def open_first(self, state: EnumerationState, path: str) -> Optional[str]:
        """
        Opens the directory and produces its first entry name.
        Returns None for an empty directory, raises EnumerationError on failure.
        """
        pass

    def read_next(self, state: EnumerationState) -> Optional[str]:
        """
        Next entry name, or None when exhausted (or already released).
        Raises EnumerationError if the OS read fails.
        """
        if state.handle is not None:
            try:
                entry = next(state.handle, None)
            except OSError as e:
                raise EnumerationError("iterate", state.path, os_error_code(e)) from e
            if entry is not None:
                return entry.name
            self._close_handle(state)

        # Dot entries are reported once the OS listing runs dry
        if state.pending:
            return state.pending.popleft()
        return None

    def release(self, state: EnumerationState) -> None:
        """Closes the handle if still held. Safe to call repeatedly."""
        self._close_handle(state)
        state.pending.clear()

    @staticmethod
    def _close_handle(state: EnumerationState) -> None:
        handle = state.handle
        state.handle = None
        if handle is not None:
            close = getattr(handle, "close", None)
            if close is not None:
                close()
