"""Execution options for batch runs."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidOptionsError


@dataclass(frozen=True, slots=True)
class Selection:
    """Pagination and filter window applied by the identifier source.

    ``limit == 0`` means no limit; ``name_filter`` is an exact match.
    """

    limit: int = 0
    skip: int = 0
    name_filter: str | None = None


@dataclass(frozen=True, slots=True)
class ExecutionOptions:
    limit: int = 0
    skip: int = 0
    name_filter: str | None = None
    concurrency: int = 1
    throttle_interval_ms: int = 0
    fail_fast: bool = False

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise InvalidOptionsError(f"concurrency must be >= 1, got {self.concurrency}")
        if self.throttle_interval_ms < 0:
            raise InvalidOptionsError(
                f"throttle_interval_ms must be >= 0, got {self.throttle_interval_ms}"
            )
        if self.limit < 0:
            raise InvalidOptionsError(f"limit must be >= 0, got {self.limit}")
        if self.skip < 0:
            raise InvalidOptionsError(f"skip must be >= 0, got {self.skip}")

    @property
    def selection(self) -> Selection:
        return Selection(limit=self.limit, skip=self.skip, name_filter=self.name_filter)

    @property
    def throttle_interval_seconds(self) -> float:
        return self.throttle_interval_ms / 1000
