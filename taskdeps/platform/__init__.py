"""Configuration, security and dependency wiring for the HTTP adapter."""

from .clients import RedisClient, RedisPipeline, get_redis
from .config import Settings, get_settings
from .security import api_key_header, verify_api_key

__all__ = [
    "RedisClient",
    "RedisPipeline",
    "Settings",
    "api_key_header",
    "get_redis",
    "get_settings",
    "verify_api_key",
]
