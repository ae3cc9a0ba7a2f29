"""Test fixtures — sample directory trees, tracking allocator, API client."""

from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portafs.allocator import TrackingAllocator
from portafs.errors import DiagnosticWriter, ErrorRecorder
from portafs.main import create_app
from portafs.platform.posix import PosixEnumerator


@pytest.fixture
def allocator():
    return TrackingAllocator()


@pytest.fixture
def recorder():
    return ErrorRecorder()


@pytest.fixture
def diagnostics(capsys):
    """Diagnostic writer bound to the (captured) stderr."""
    return DiagnosticWriter()


@pytest.fixture
def posix():
    return PosixEnumerator()


@pytest.fixture
def sample_dir(tmp_path):
    """Directory with files a (5 bytes), b (7 bytes) and a non-empty subdirectory."""
    root = tmp_path / "t"
    root.mkdir()
    (root / "a").write_bytes(b"x" * 5)
    (root / "b").write_bytes(b"y" * 7)
    sub = root / "sub"
    sub.mkdir()
    (sub / "nested").write_bytes(b"z" * 100)
    return root


@pytest_asyncio.fixture
async def client():
    """Async test client against a fresh app instance."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class FakeHandle:
    """scandir stand-in: yields ``names`` then raises ``error`` (if any)."""

    def __init__(self, names, error=None):
        self._names = list(names)
        self._error = error
        self.closed = False

    def __iter__(self):
        return self

    def __next__(self):
        if self._names:
            return SimpleNamespace(name=self._names.pop(0))
        if self._error is not None:
            raise self._error
        raise StopIteration

    def close(self):
        self.closed = True


@pytest.fixture
def fake_handle():
    """Factory for scripted scandir handles."""
    return FakeHandle
