"""Tests for cache manager utilities."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from svg_icon_sprite.utils.cache_manager import AsyncMemo, CacheState


class TestAsyncMemo:
    """Test AsyncMemo class."""

    def test_init(self) -> None:
        """Test cache initialization."""
        memo: AsyncMemo[str] = AsyncMemo(AsyncMock(return_value="value"), name="test")

        assert memo.state is CacheState.UNINITIALIZED
        assert memo.name == "test"
        assert isinstance(memo.logger, logging.Logger)

    @pytest.mark.asyncio()
    async def test_get_caches_value(self) -> None:
        """Test the factory runs once and the value is kept."""
        factory = AsyncMock(return_value="value")
        memo: AsyncMemo[str] = AsyncMemo(factory)

        assert await memo.get() == "value"
        assert await memo.get() == "value"
        assert factory.await_count == 1
        assert memo.state is CacheState.CACHED

    @pytest.mark.asyncio()
    async def test_none_is_cached(self) -> None:
        """Test a None result counts as a computed value."""
        factory = AsyncMock(return_value=None)
        memo: AsyncMemo[None] = AsyncMemo(factory)

        assert await memo.get() is None
        assert await memo.get() is None
        assert factory.await_count == 1

    @pytest.mark.asyncio()
    async def test_concurrent_callers_share_computation(self) -> None:
        """Test callers arriving during computation await the same run."""
        calls = 0
        release = asyncio.Event()

        async def factory() -> object:
            nonlocal calls
            calls += 1
            await release.wait()
            return object()

        memo: AsyncMemo[object] = AsyncMemo(factory)
        first = asyncio.ensure_future(memo.get())
        second = asyncio.ensure_future(memo.get())
        await asyncio.sleep(0)
        assert memo.state is CacheState.COMPUTING

        release.set()
        results = await asyncio.gather(first, second)

        assert calls == 1
        assert results[0] is results[1]

    @pytest.mark.asyncio()
    async def test_reset_recomputes(self) -> None:
        """Test reset discards the value."""
        factory = AsyncMock(side_effect=["first", "second"])
        memo: AsyncMemo[str] = AsyncMemo(factory)

        assert await memo.get() == "first"
        memo.reset()
        assert memo.state is CacheState.UNINITIALIZED
        assert await memo.get() == "second"

    @pytest.mark.asyncio()
    async def test_failure_is_not_cached(self) -> None:
        """Test a failing factory leaves the cache uninitialized."""
        factory = AsyncMock(side_effect=[RuntimeError("boom"), "value"])
        memo: AsyncMemo[str] = AsyncMemo(factory)

        with pytest.raises(RuntimeError, match="boom"):
            await memo.get()
        assert memo.state is CacheState.UNINITIALIZED

        assert await memo.get() == "value"

    @pytest.mark.asyncio()
    async def test_reset_during_computation_discards_result(self) -> None:
        """Test a result computed before a reset is not stored."""
        release = asyncio.Event()
        values = iter(["stale", "fresh"])

        async def factory() -> str:
            await release.wait()
            return next(values)

        memo: AsyncMemo[str] = AsyncMemo(factory)
        pending = asyncio.ensure_future(memo.get())
        await asyncio.sleep(0)

        memo.reset()
        release.set()

        assert await pending == "stale"
        assert memo.state is CacheState.UNINITIALIZED
        assert await memo.get() == "fresh"
