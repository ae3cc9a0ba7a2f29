"""Portable directory iterator over a pluggable platform enumerator.

Lifecycle::

    it = dir_iter_start("/tmp")
    if it is not None:
        try:
            while it.entry_name is not None:
                ...
                if not dir_iter_next(it):
                    break
        finally:
            dir_iter_end(it)

The iterator is always in exactly one of three states (see ``IterState``).
Starting it performs the first enumeration step, so a fresh iterator already
points at the first entry, or is exhausted if the directory is empty.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Iterator, Optional

from portafs.allocator import Allocator, check_allocator, get_default_allocator
from portafs.errors import ErrorRecorder, StaleEntryError, default_recorder
from portafs.platform import get_enumerator
from portafs.platform.base import DirectoryEnumerator, EnumerationError, EnumerationState

logger = logging.getLogger(__name__)


class IterState(str, Enum):
    OPEN_WITH_ENTRY = "open_with_entry"
    OPEN_EXHAUSTED = "open_exhausted"
    RELEASED = "released"


class AdvanceResult(str, Enum):
    ENTRY = "entry"
    EXHAUSTED = "exhausted"
    ERROR = "error"


class EntryView:
    """Borrowed view of the iterator's current entry.

    Valid only until the iterator advances or is released.
    """

    __slots__ = ("_iterator", "_position")

    def __init__(self, iterator: DirectoryIterator, position: int):
        self._iterator = iterator
        self._position = position

    @property
    def is_valid(self) -> bool:
        return self._iterator._position == self._position and self._iterator.entry_name is not None

    @property
    def name(self) -> str:
        if not self.is_valid:
            raise StaleEntryError(
                f"Entry view for {self._iterator.path} is no longer valid"
            )
        return self._iterator.entry_name

    def __repr__(self) -> str:
        if self.is_valid:
            return f"EntryView({self._iterator.entry_name!r})"
        return "EntryView(<stale>)"


class DirectoryIterator:
    """One open enumeration of one directory.

    Instances are created by ``dir_iter_start`` through an allocator. Do not
    share one instance between threads.
    """

    def __init__(self):
        # Zero-initialised; dir_iter_start fills these in
        self.allocator: Optional[Allocator] = None
        self.enumerator: Optional[DirectoryEnumerator] = None
        self.recorder: ErrorRecorder = default_recorder
        self.path: Optional[str] = None
        self.entry_name: Optional[str] = None
        self.last_error: Optional[EnumerationError] = None
        self._platform_state: Optional[EnumerationState] = None
        self._position = 0
        self._released = False

    @property
    def state(self) -> IterState:
        if self._released:
            return IterState.RELEASED
        if self.entry_name is not None:
            return IterState.OPEN_WITH_ENTRY
        return IterState.OPEN_EXHAUSTED

    @property
    def entry(self) -> Optional[EntryView]:
        if self.entry_name is None:
            return None
        return EntryView(self, self._position)

    def advance(self) -> AdvanceResult:
        """Move to the next entry, telling exhaustion and read errors apart."""
        state = self._platform_state
        if state is None:
            self.recorder.set_error_msg("iter is invalid")
            return AdvanceResult.ERROR

        try:
            name = self.enumerator.read_next(state)
        except EnumerationError as e:
            self.last_error = e
            self.recorder.set_error_msg(str(e))
            self._exhaust()
            return AdvanceResult.ERROR

        if name is None:
            self._exhaust()
            return AdvanceResult.EXHAUSTED

        self._set_entry(name)
        return AdvanceResult.ENTRY

    def close(self) -> None:
        dir_iter_end(self)

    def __enter__(self) -> DirectoryIterator:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[str]:
        """Yield the current entry name and every one after it."""
        while self.entry_name is not None:
            yield self.entry_name
            if self.advance() is not AdvanceResult.ENTRY:
                break

    def __repr__(self) -> str:
        return f"DirectoryIterator(path={self.path!r}, state={self.state.value})"

    def _set_entry(self, name: Optional[str]) -> None:
        self.entry_name = name
        self._position += 1

    def _exhaust(self) -> None:
        # Hand the platform handle back now instead of waiting for dir_iter_end
        self.enumerator.release(self._platform_state)
        self._set_entry(None)


def dir_iter_start(
    directory_path,
    allocator: Optional[Allocator] = None,
    *,
    enumerator: Optional[DirectoryEnumerator] = None,
    recorder: Optional[ErrorRecorder] = None,
) -> Optional[DirectoryIterator]:
    """Open ``directory_path`` and position on its first entry.

    Returns None on failure, with the reason left in ``recorder``. Nothing
    acquired along the way survives a failed start.
    """
    recorder = recorder or default_recorder
    if directory_path is None:
        recorder.set_error_msg("directory_path argument is null")
        return None
    if allocator is None:
        allocator = get_default_allocator()
    if not check_allocator(allocator):
        recorder.set_error_msg("allocator is invalid")
        return None

    path = os.fspath(directory_path)
    enumerator = enumerator or get_enumerator()

    iterator = allocator.zero_allocate(DirectoryIterator)
    if iterator is None:
        recorder.set_error_msg(f"Failed to allocate directory iterator for {path}")
        return None
    iterator.allocator = allocator
    iterator.enumerator = enumerator
    iterator.recorder = recorder
    iterator.path = path

    state = allocator.zero_allocate(enumerator.new_state)
    if state is None:
        recorder.set_error_msg(f"Failed to allocate iterator state for {path}")
        dir_iter_end(iterator)
        return None
    iterator._platform_state = state

    try:
        first = enumerator.open_first(state, path)
    except EnumerationError as e:
        recorder.set_error_msg(str(e))
        dir_iter_end(iterator)
        return None

    if first is None:
        enumerator.release(state)
    iterator._set_entry(first)
    logger.debug("Started %s enumeration of %s", enumerator.name, path)
    return iterator


def dir_iter_next(iterator: Optional[DirectoryIterator]) -> bool:
    """True if a next entry is available. False on exhaustion or read error."""
    if iterator is None:
        default_recorder.set_error_msg("iter argument is null")
        return False
    return iterator.advance() is AdvanceResult.ENTRY


def dir_iter_end(iterator: Optional[DirectoryIterator]) -> None:
    """Release the handle, the state record and the iterator. None is a no-op."""
    if iterator is None or iterator._released:
        return

    allocator = iterator.allocator or get_default_allocator()
    state = iterator._platform_state
    if state is not None:
        if iterator.enumerator is not None:
            iterator.enumerator.release(state)
        allocator.deallocate(state)
        iterator._platform_state = None

    iterator._released = True
    iterator._set_entry(None)
    allocator.deallocate(iterator)
