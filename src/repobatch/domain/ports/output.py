"""Port for writing generated JSON documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


@runtime_checkable
class JsonSink(Protocol):
    def save(self, payload: Mapping[str, object], filename: str) -> Path: ...
