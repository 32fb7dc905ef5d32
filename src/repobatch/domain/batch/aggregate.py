"""Fold per-item outcomes into a single report."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import TYPE_CHECKING, Any

from .outcome import ERROR_KEY, AggregatedReport, Success, Summary

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from .outcome import Outcome

type SummaryReducer[T] = Callable[[Sequence[Outcome[T]]], Mapping[str, Any]]


def aggregate_results[T](
    outcomes: Sequence[Outcome[T]],
    *,
    reducer: SummaryReducer[T] | None = None,
) -> AggregatedReport[T]:
    """Collect success payloads in order and derive summary statistics.

    ``flag_counts`` counts outcomes whose meta value is ``True`` for a key;
    ``numeric_totals`` sums int/float meta values per key. The ``error`` flag is
    reported through ``failure_count`` instead.
    """

    payloads: list[T] = []
    flag_counts: Counter[str] = Counter()
    numeric_totals: defaultdict[str, float] = defaultdict(float)

    for outcome in outcomes:
        if isinstance(outcome, Success):
            payloads.append(outcome.payload)
        for key, value in outcome.meta.items():
            if key == ERROR_KEY:
                continue
            if isinstance(value, bool):
                if value:
                    flag_counts[key] += 1
            elif isinstance(value, int | float):
                numeric_totals[key] += value

    summary = Summary(
        total=len(outcomes),
        success_count=len(payloads),
        failure_count=len(outcomes) - len(payloads),
        flag_counts=dict(flag_counts),
        numeric_totals=dict(numeric_totals),
        extra=dict(reducer(outcomes)) if reducer is not None else {},
    )
    return AggregatedReport(payloads=tuple(payloads), summary=summary)
