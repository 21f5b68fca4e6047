"""Process-wide cap on concurrent transaction service calls."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueryThrottle:
    """Admit at most ``max_concurrent`` operations at once.

    Callers beyond the limit wait in arrival order. Failures are logged and
    re-raised unchanged; the throttle never retries.
    """

    def __init__(self, max_concurrent: int = 4):
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._active = 0
        self._waiting = 0

    @property
    def active(self) -> int:
        """Operations currently executing."""
        return self._active

    @property
    def waiting(self) -> int:
        """Operations queued for a slot."""
        return self._waiting

    async def run(
        self,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        operation_name: str = "",
        chain_id: Optional[int] = None,
        **kwargs: Any,
    ) -> T:
        """Await ``operation(*args, **kwargs)`` once a slot is free."""
        name = operation_name or getattr(operation, "__name__", "operation")

        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1

        self._active += 1
        try:
            result = await operation(*args, **kwargs)
            logger.debug(f"Throttled call {name} completed (chain={chain_id})")
            return result
        except Exception as e:
            logger.error(f"Throttled call {name} failed (chain={chain_id}): {e}")
            raise
        finally:
            self._active -= 1
            self._semaphore.release()
