"""Shared logging helpers for repobatch."""

from __future__ import annotations

import logging
from typing import Final

TRACE: Final[int] = 5

logging.addLevelName(TRACE, "TRACE")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for CLI output. Pass ``force=True`` to
    reconfigure during tests or specialised entry points. ``TRACE`` is accepted as a
    level for the per-call throttle notifications.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
