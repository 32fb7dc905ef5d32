"""Execution context threaded through a batch run."""

from __future__ import annotations

import asyncio
from contextlib import suppress
from dataclasses import dataclass, field
from logging import Logger, getLogger


def emit(logger: Logger, level: int, msg: str, *args: object, **kwargs: object) -> None:
    """Log through ``logger``; a failing filter or handler never reaches the caller."""

    with suppress(Exception):
        logger.log(level, msg, *args, **kwargs)  # pyright: ignore[reportArgumentType]


@dataclass(slots=True)
class ExecutionContext:
    """Side channels for a run: where diagnostics go and how to stop it early."""

    logger: Logger = field(default_factory=lambda: getLogger("repobatch.batch"))
    cancel_event: asyncio.Event | None = None

    def emit(self, level: int, msg: str, *args: object, **kwargs: object) -> None:
        emit(self.logger, level, msg, *args, **kwargs)

    def cancel(self) -> None:
        if self.cancel_event is None:
            raise RuntimeError("Execution context was created without a cancel event")
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()
