"""Per-item outcomes and the aggregated report built from them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

type MetaValue = bool | int | float | str
type Meta = Mapping[str, MetaValue]

ERROR_KEY = "error"


def _freeze_meta(meta: Meta, *, error: bool) -> Meta:
    merged: dict[str, MetaValue] = dict(meta)
    for key, value in merged.items():
        if not isinstance(value, bool | int | float | str):
            raise TypeError(f"Unsupported meta value for {key!r}: {type(value).__name__}")
    merged[ERROR_KEY] = error
    return MappingProxyType(merged)


@dataclass(frozen=True, slots=True)
class Success[T]:
    payload: T
    meta: Meta = field(default_factory=dict[str, MetaValue])

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", _freeze_meta(self.meta, error=False))

    @property
    def is_error(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Failure:
    meta: Meta = field(default_factory=dict[str, MetaValue])

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", _freeze_meta(self.meta, error=True))

    @property
    def is_error(self) -> bool:
        return True


type Outcome[T] = Success[T] | Failure


@dataclass(frozen=True, slots=True)
class Summary:
    total: int
    success_count: int
    failure_count: int
    flag_counts: Mapping[str, int] = field(default_factory=dict[str, int])
    numeric_totals: Mapping[str, float] = field(default_factory=dict[str, float])
    extra: Mapping[str, Any] = field(default_factory=dict[str, Any])


@dataclass(frozen=True, slots=True)
class AggregatedReport[T]:
    payloads: tuple[T, ...]
    summary: Summary
