"""Application layer coordinating the dependency engine's ports."""

from .ports import EdgeStore, TaskReader
from .service import DependencyService

__all__ = ["DependencyService", "EdgeStore", "TaskReader"]
