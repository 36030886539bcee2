"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthError,
    InfrastructureError,
    InputError,
    RedisConnectionError,
    StorageError,
)

__all__ = [
    "AuthError",
    "InfrastructureError",
    "InputError",
    "RedisConnectionError",
    "StorageError",
]
