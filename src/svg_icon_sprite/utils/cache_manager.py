"""Memoization utilities for asynchronous computations.

Symbols and sprites compute their output lazily and keep it until they are
explicitly reset. The cache here makes the lifecycle of such a value explicit
instead of relying on a stored awaitable.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class CacheState(str, Enum):
    """Lifecycle state of a memoized value."""

    UNINITIALIZED = "uninitialized"
    COMPUTING = "computing"
    CACHED = "cached"


class AsyncMemo(Generic[T]):
    """Single-value cache for an asynchronous factory.

    The first call to ``get`` starts the factory; callers arriving while it
    runs await the same task. A successful result (``None`` included) is kept
    until ``reset`` is called. A failing factory leaves the cache
    uninitialized and the error propagates to every waiting caller.

    A reset issued while the factory is running discards the result of that
    run; the next ``get`` starts a fresh computation.

    Attributes:
        name: Label used in log messages
        logger: Logger instance
        _factory: Coroutine function producing the value
        _state: Current lifecycle state
        _task: In-flight computation while computing
        _value: Cached value once computed
        _generation: Incremented on every reset
    """

    def __init__(self, factory: Callable[[], Awaitable[T]], name: str = "") -> None:
        """Initialize the cache.

        Args:
            factory: Coroutine function producing the value
            name: Label used in log messages
        """
        self.name = name
        self.logger = logging.getLogger(__name__)
        self._factory = factory
        self._state = CacheState.UNINITIALIZED
        self._task: asyncio.Task[T] | None = None
        self._value: T | None = None
        self._generation = 0

    @property
    def state(self) -> CacheState:
        """Get the current lifecycle state."""
        return self._state

    async def get(self) -> T:
        """Get the cached value, computing it if necessary.

        Returns:
            The value produced by the factory.
        """
        if self._state is CacheState.CACHED:
            return self._value  # type: ignore[return-value]

        if self._task is None:
            self.logger.debug(f"Computing {self.name}")
            self._task = asyncio.ensure_future(self._run(self._generation))
            self._state = CacheState.COMPUTING

        # Shield so that a cancelled caller does not cancel the shared task
        return await asyncio.shield(self._task)

    async def _run(self, generation: int) -> T:
        """Run the factory and store its result if still current.

        Args:
            generation: Generation the computation was started in

        Returns:
            The value produced by the factory.
        """
        try:
            value = await self._factory()
        except BaseException:
            if generation == self._generation:
                self._task = None
                self._state = CacheState.UNINITIALIZED
            raise

        if generation == self._generation:
            self._value = value
            self._task = None
            self._state = CacheState.CACHED
        return value

    def reset(self) -> None:
        """Discard the cached value and any in-flight computation result."""
        self._generation += 1
        self._task = None
        self._value = None
        self._state = CacheState.UNINITIALIZED
