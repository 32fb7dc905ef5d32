"""Rate throttle spacing the starts of units of work."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from aiolimiter import AsyncLimiter

from repobatch.config.logging import TRACE

from .context import emit

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from logging import Logger

log = getLogger(__name__)


class RateThrottle:
    """Single global gate: at most one call starts per ``interval_seconds``.

    The gate is shared by every worker of a run, so with several workers the
    interval caps the start rate while started calls may still overlap. An
    interval of zero turns the throttle into a pass-through.
    """

    def __init__(self, interval_seconds: float, *, logger: Logger | None = None) -> None:
        if interval_seconds < 0:
            raise ValueError(f"Throttle interval must be >= 0, got {interval_seconds}")
        self.interval_seconds = interval_seconds
        self._log = logger or log
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(1, interval_seconds) if interval_seconds > 0 else None
        )

    @property
    def enabled(self) -> bool:
        return self._limiter is not None

    async def acquire(self) -> None:
        """Wait until a new start is allowed."""

        if self._limiter is None:
            return
        if not self._limiter.has_capacity():
            emit(self._log, TRACE, "Reached interval limit, call is delayed")
        await self._limiter.acquire()

    def wrap[**P, R](self, func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        """Return ``func`` gated by this throttle."""

        if self._limiter is None:
            return func

        async def throttled(*args: P.args, **kwargs: P.kwargs) -> R:
            await self.acquire()
            return await func(*args, **kwargs)

        return throttled
