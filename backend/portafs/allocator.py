"""Allocator capability — injectable provider for iterator records and path strings."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Allocator(ABC):
    """Contract for allocate / zero-allocate / deallocate.

    ``allocate`` and ``zero_allocate`` return ``None`` when the allocation
    cannot be satisfied. Callers own what they get back and must hand it to
    ``deallocate`` when done.
    """

    @abstractmethod
    def allocate(self, factory: Callable[[], T]) -> T | None:
        """Produce a new object from ``factory``."""

    @abstractmethod
    def zero_allocate(self, factory: Callable[[], T]) -> T | None:
        """Produce a default-initialised record from ``factory``."""

    @abstractmethod
    def deallocate(self, obj: Any) -> None:
        """Give ``obj`` back to the allocator."""


class DefaultAllocator(Allocator):
    """Plain allocator: every request succeeds, deallocate is a no-op."""

    def allocate(self, factory: Callable[[], T]) -> T | None:
        return factory()

    def zero_allocate(self, factory: Callable[[], T]) -> T | None:
        return factory()

    def deallocate(self, obj: Any) -> None:
        return None


class TrackingAllocator(Allocator):
    """Counts live allocations and can be made to fail.

    ``fail_after`` is the number of allocations that succeed before every
    further request returns ``None``. ``None`` means never fail.
    """

    def __init__(self, fail_after: int | None = None):
        self.fail_after = fail_after
        self.total_allocations = 0
        self.total_deallocations = 0
        # Identity matters, not equality: equal strings are distinct allocations
        self._live: list[Any] = []
        self._lock = threading.Lock()

    @property
    def live(self) -> int:
        return len(self._live)

    def allocate(self, factory: Callable[[], T]) -> T | None:
        with self._lock:
            if self.fail_after is not None and self.total_allocations >= self.fail_after:
                logger.debug("Allocation refused after %d allocations", self.total_allocations)
                return None
            obj = factory()
            self.total_allocations += 1
            self._live.append(obj)
            return obj

    def zero_allocate(self, factory: Callable[[], T]) -> T | None:
        return self.allocate(factory)

    def deallocate(self, obj: Any) -> None:
        if obj is None:
            return
        with self._lock:
            for index, owned in enumerate(self._live):
                if owned is obj:
                    del self._live[index]
                    self.total_deallocations += 1
                    return
        logger.warning("Deallocating object not owned by this allocator: %r", obj)


_default_allocator = DefaultAllocator()


def get_default_allocator() -> Allocator:
    return _default_allocator


def check_allocator(allocator: Any) -> bool:
    """True if ``allocator`` offers callable allocate/zero_allocate/deallocate."""
    if allocator is None:
        return False
    return all(
        callable(getattr(allocator, name, None))
        for name in ("allocate", "zero_allocate", "deallocate")
    )
