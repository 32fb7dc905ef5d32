"""Batch entry point: select, schedule, isolate, aggregate."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .aggregate import aggregate_results
from .context import ExecutionContext
from .isolation import FailureIsolator
from .options import ExecutionOptions
from .scheduler import ConcurrencyScheduler
from .throttle import RateThrottle

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from repobatch.domain.ports.sources import BatchSource

    from .aggregate import SummaryReducer
    from .outcome import AggregatedReport, Outcome


async def run_batch[E, T](
    source: BatchSource[E],
    unit_of_work: Callable[[E, int], Awaitable[Outcome[T]]],
    options: ExecutionOptions | None = None,
    *,
    context: ExecutionContext | None = None,
    describe: Callable[[E], str] = str,
    reducer: SummaryReducer[T] | None = None,
) -> AggregatedReport[T]:
    """Apply ``unit_of_work`` to every entity selected from ``source``.

    Raises :class:`~repobatch.domain.batch.errors.EntityNotFoundError` when an
    identifier cannot be resolved, and
    :class:`~repobatch.domain.batch.errors.UnitOfWorkFailure` when a unit of work
    fails in fail-fast mode. Any other per-item failure is recorded in the report.

    An abort stops admitting new identifiers, but items already in flight run to
    completion before the error is raised; their outcomes are discarded.
    """

    effective = options or ExecutionOptions()
    ctx = context or ExecutionContext()

    selection = effective.selection
    ids = list(await source.list_ids(selection))
    if not ids:
        ctx.emit(
            logging.WARNING,
            "No repos selected (name=%s, limit=%s, skip=%s)",
            selection.name_filter,
            selection.limit,
            selection.skip,
        )
    ctx.emit(
        logging.INFO,
        "Processing %d repos (concurrency=%d, throttle=%dms, fail_fast=%s)...",
        len(ids),
        effective.concurrency,
        effective.throttle_interval_ms,
        effective.fail_fast,
    )

    throttle = RateThrottle(effective.throttle_interval_seconds, logger=ctx.logger)
    isolator = FailureIsolator(
        source,
        throttle.wrap(unit_of_work),
        context=ctx,
        fail_fast=effective.fail_fast,
        describe=describe,
    )
    scheduler = ConcurrencyScheduler(effective.concurrency, cancel_event=ctx.cancel_event)
    outcomes = await scheduler.map(ids, isolator)

    ctx.emit(logging.INFO, "Processed %d repos", len(ids))
    return aggregate_results(outcomes, reducer=reducer)
