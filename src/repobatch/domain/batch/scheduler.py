"""Bounded worker pool mapping an ordered sequence through an async worker."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import BatchCancelledError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

log = getLogger(__name__)

_PENDING = object()


class ConcurrencyScheduler:
    """Run at most ``concurrency`` workers over ``items``, keeping input order.

    Workers pull from one shared cursor, so a slot is refilled as soon as it frees
    up. Results land in slots indexed by input position. On the first exception no
    further item is admitted; workers already running are allowed to settle and the
    first exception is then re-raised. Setting ``cancel_event`` stops admission the
    same way and raises :class:`BatchCancelledError`.
    """

    def __init__(
        self,
        concurrency: int,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError(f"Concurrency must be >= 1, got {concurrency}")
        self.concurrency = concurrency
        self._cancel_event = cancel_event

    async def map[T, R](
        self,
        items: Sequence[T],
        worker: Callable[[T, int], Awaitable[R]],
    ) -> list[R]:
        slots: list[object] = [_PENDING] * len(items)
        cursor = iter(enumerate(items))
        errors: list[BaseException] = []

        def admission_closed() -> bool:
            if errors:
                return True
            return self._cancel_event is not None and self._cancel_event.is_set()

        async def drain() -> None:
            for index, item in cursor:
                if admission_closed():
                    return
                try:
                    slots[index] = await worker(item, index)
                except Exception as exc:  # noqa: BLE001
                    errors.append(exc)
                    return

        pool_size = min(self.concurrency, len(items))
        await asyncio.gather(*(drain() for _ in range(pool_size)))

        if errors:
            if len(errors) > 1:
                log.debug("%d further worker error(s) after the first one", len(errors) - 1)
            raise errors[0]
        if any(slot is _PENDING for slot in slots):
            raise BatchCancelledError(
                f"Batch cancelled after {sum(slot is not _PENDING for slot in slots)} "
                f"of {len(items)} items"
            )
        return slots  # pyright: ignore[reportReturnType]
