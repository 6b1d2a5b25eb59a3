# Tests for DirectoryEnumerator.
# Created: 2026-10-19

import asyncio
import os
import threading

import pytest

from dirstream.errors import DirectoryOpenFailure
from dirstream.listing.enumerator import DirectoryEnumerator, RawEntry


class _FakeDirEntry:
    def __init__(self, name: str, is_dir: bool = False, error: OSError | None = None):
        self.name = name
        self._is_dir = is_dir
        self._error = error

    def is_dir(self):
        if self._error is not None:
            raise self._error
        return self._is_dir


class _FakeHandle:
    """Stands in for a scandir iterator and records close()."""

    def __init__(self, entries):
        self._entries = iter(entries)
        self.close_calls = 0
        self.reads = 0

    def __next__(self):
        self.reads += 1
        return next(self._entries)

    def close(self):
        self.close_calls += 1


class _BlockingHandle:
    """Blocks the first read until released."""

    def __init__(self):
        self.release = threading.Event()
        self.read_finished = False
        self.closed = False
        self.closed_during_read = False

    def __next__(self):
        self.release.wait(5)
        self.read_finished = True
        return _FakeDirEntry("late.txt")

    def close(self):
        self.closed_during_read = not self.read_finished
        self.closed = True


@pytest.fixture
def populated(tmp_path):
    (tmp_path / "a.txt").write_text("hello")
    (tmp_path / "b.log").write_text("")
    (tmp_path / "sub").mkdir()
    return tmp_path


class TestOpen:
    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path):
        with pytest.raises(DirectoryOpenFailure) as exc_info:
            await DirectoryEnumerator.open(str(tmp_path / "nope"))
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    @pytest.mark.asyncio
    async def test_not_a_directory(self, tmp_path):
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(DirectoryOpenFailure) as exc_info:
            await DirectoryEnumerator.open(str(target))
        assert isinstance(exc_info.value.cause, OSError)


class TestIteration:
    @pytest.mark.asyncio
    async def test_yields_raw_entries_with_hints(self, populated):
        enumerator = await DirectoryEnumerator.open(str(populated))
        entries = [raw async for raw in enumerator]

        by_name = {e.name: e for e in entries}
        assert set(by_name) == {"a.txt", "b.log", "sub"}
        assert by_name["sub"] == RawEntry("sub", True)
        assert by_name["a.txt"].is_dir is False

    @pytest.mark.asyncio
    async def test_preserves_os_order(self, populated):
        for i in range(50):
            (populated / f"f{i:03d}").write_text("")
        expected = [e.name for e in os.scandir(populated)]

        enumerator = await DirectoryEnumerator.open(str(populated))
        assert [raw.name async for raw in enumerator] == expected

    @pytest.mark.asyncio
    async def test_empty_directory(self, tmp_path):
        enumerator = await DirectoryEnumerator.open(str(tmp_path))
        assert [raw async for raw in enumerator] == []
        assert enumerator.closed

    @pytest.mark.asyncio
    async def test_exhaustion_closes_handle(self):
        handle = _FakeHandle([_FakeDirEntry("x"), _FakeDirEntry("y", True)])
        enumerator = DirectoryEnumerator("/fake", handle)

        names = [raw.name async for raw in enumerator]

        assert names == ["x", "y"]
        assert enumerator.closed
        assert handle.close_calls == 1

    @pytest.mark.asyncio
    async def test_not_restartable(self):
        handle = _FakeHandle([_FakeDirEntry("x")])
        enumerator = DirectoryEnumerator("/fake", handle)
        assert [raw.name async for raw in enumerator] == ["x"]
        assert [raw.name async for raw in enumerator] == []

    @pytest.mark.asyncio
    async def test_hint_error_treated_as_file(self):
        handle = _FakeHandle([_FakeDirEntry("flaky", error=PermissionError("denied"))])
        enumerator = DirectoryEnumerator("/fake", handle)
        assert [raw async for raw in enumerator] == [RawEntry("flaky", False)]


class TestRelease:
    @pytest.mark.asyncio
    async def test_early_abandon_with_aclose(self):
        handle = _FakeHandle([_FakeDirEntry(f"e{i}") for i in range(10)])
        enumerator = DirectoryEnumerator("/fake", handle)

        async for _ in enumerator:
            break
        await enumerator.aclose()

        assert handle.close_calls == 1
        assert handle.reads == 1

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        handle = _FakeHandle([_FakeDirEntry(f"e{i}") for i in range(10)])
        async with DirectoryEnumerator("/fake", handle) as enumerator:
            await enumerator.__anext__()
        assert handle.close_calls == 1

    @pytest.mark.asyncio
    async def test_aclose_idempotent(self):
        handle = _FakeHandle([])
        enumerator = DirectoryEnumerator("/fake", handle)
        await enumerator.aclose()
        await enumerator.aclose()
        assert handle.close_calls == 1

    @pytest.mark.asyncio
    async def test_cancelled_read_finishes_before_close(self):
        handle = _BlockingHandle()
        enumerator = DirectoryEnumerator("/fake", handle)

        reader = asyncio.create_task(enumerator.__anext__())
        await asyncio.sleep(0.05)
        reader.cancel()
        with pytest.raises(asyncio.CancelledError):
            await reader

        closer = asyncio.create_task(enumerator.aclose())
        await asyncio.sleep(0.05)
        assert not handle.closed

        handle.release.set()
        await asyncio.wait_for(closer, timeout=5)

        assert handle.closed
        assert not handle.closed_during_read
