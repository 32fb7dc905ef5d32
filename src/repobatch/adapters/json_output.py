"""JSON file output for generated documents."""

from __future__ import annotations

import json
from datetime import date, datetime
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


def _default(value: object) -> object:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, set | frozenset):
        return list(value)  # pyright: ignore[reportUnknownArgumentType]
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonFileWriter:
    """Writes UTF-8 JSON documents into one output directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def save(self, payload: Mapping[str, object], filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_text(
            json.dumps(dict(payload), ensure_ascii=False, indent=2, default=_default) + "\n",
            encoding="utf-8",
        )
        log.info("Saved %s", path)
        return path
