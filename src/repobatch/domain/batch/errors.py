"""Errors raised by the batch engine."""

from __future__ import annotations


class BatchError(RuntimeError):
    """Base class for errors that abort a batch run."""


class EntityNotFoundError(BatchError):
    """An identifier from the selection resolved to no stored entity."""

    def __init__(self, identifier: str) -> None:
        super().__init__(f"Entity not found by id: {identifier}")
        self.identifier = identifier


class UnitOfWorkFailure(BatchError):
    """A unit of work raised while the run was in fail-fast mode.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, identifier: str, *, label: str, index: int) -> None:
        super().__init__(f"Error processing {label} (id={identifier}, #{index + 1})")
        self.identifier = identifier
        self.label = label
        self.index = index


class BatchCancelledError(BatchError):
    """The run was cancelled through its execution context."""


class InvalidOptionsError(ValueError):
    """Execution options failed validation."""
