"""Storage adapters for the dependency engine."""

from .edge_store import RedisEdgeStore, create_redis_edge_store
from .task_reader import RedisTaskReader, create_redis_task_reader

__all__ = [
    "RedisEdgeStore",
    "RedisTaskReader",
    "create_redis_edge_store",
    "create_redis_task_reader",
]
