"""Bounded, throttled, failure-isolated iteration over stored entities."""

from __future__ import annotations

from .aggregate import SummaryReducer, aggregate_results
from .context import ExecutionContext
from .errors import (
    BatchCancelledError,
    BatchError,
    EntityNotFoundError,
    InvalidOptionsError,
    UnitOfWorkFailure,
)
from .isolation import FailureIsolator
from .options import ExecutionOptions, Selection
from .outcome import AggregatedReport, Failure, Meta, MetaValue, Outcome, Success, Summary
from .runner import run_batch
from .scheduler import ConcurrencyScheduler
from .throttle import RateThrottle

__all__ = [
    "AggregatedReport",
    "BatchCancelledError",
    "BatchError",
    "ConcurrencyScheduler",
    "EntityNotFoundError",
    "ExecutionContext",
    "ExecutionOptions",
    "Failure",
    "FailureIsolator",
    "InvalidOptionsError",
    "Meta",
    "MetaValue",
    "Outcome",
    "RateThrottle",
    "Selection",
    "Success",
    "Summary",
    "SummaryReducer",
    "UnitOfWorkFailure",
    "aggregate_results",
    "run_batch",
]
