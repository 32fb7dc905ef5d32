"""Built-in batch tasks."""

from __future__ import annotations

from .build_static_api import build_static_api_task
from .registry import Task, TaskContext, TaskRegistry, UnknownTaskError
from .update_github_data import update_github_data_task


def default_registry() -> TaskRegistry:
    registry = TaskRegistry()
    registry.register(build_static_api_task)
    registry.register(update_github_data_task)
    return registry


__all__ = [
    "Task",
    "TaskContext",
    "TaskRegistry",
    "UnknownTaskError",
    "build_static_api_task",
    "default_registry",
    "update_github_data_task",
]
