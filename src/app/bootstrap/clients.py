"""Factories de clientes externos (Redis)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


def create_async_redis_client(redis_url: str) -> AsyncRedis[bytes]:
    """Cria cliente Redis assíncrono.

    A conexão é aberta sob demanda no primeiro comando.

    Raises:
        ValueError: Se redis_url estiver vazio
    """
    from redis.asyncio import Redis as AsyncRedis

    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: AsyncRedis[bytes] = AsyncRedis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
    )

    logger.info("async_redis_client_created")
    return client


async def close_async_redis_client(client: object) -> None:
    """Fecha cliente Redis (aclose nas versões novas, close nas antigas)."""
    close_async = getattr(client, "aclose", None)
    close_sync = getattr(client, "close", None)
    if callable(close_async):
        await close_async()
    elif callable(close_sync):
        await close_sync()
