"""Redis Table Store: tabela de validação em Redis.

Estrutura (prefixo configurável, chave sempre em minúsculas):
- {prefix}{key}      → JSON da linha gravada por `put` (SETEX com TTL)
- {prefix}log:{key}  → LIST de JSON `{"row": ..., "expires_at": ...}` gravada
                        por `append`; cada item expira individualmente na
                        leitura e a lista inteira recebe EXPIRE a cada append

Contrato de Keys:
    A chave é o próprio e-mail normalizado. Nunca logar a chave completa.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from app.protocols.validation_store import ValidationStoreProtocol
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from collections.abc import Callable

    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

# Limite de itens por lista de append (protege contra chaves "quentes")
MAX_LOG_ENTRIES_PER_KEY = 1000


class RedisTableStore(ValidationStoreProtocol):
    """Tabela com coluna-chave case-insensitive sobre Redis assíncrono.

    Args:
        redis_client: Cliente Redis assíncrono
        key_column: Coluna usada como chave nas linhas de append
        prefix: Namespace da tabela (ex: "email_validation:known_valid:")
        clock: Fonte de tempo (epoch em segundos)
    """

    def __init__(
        self,
        redis_client: AsyncRedis[bytes],
        key_column: str,
        prefix: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = redis_client
        self._key_column = key_column
        self._prefix = prefix
        self._clock = clock

    def _key(self, key: str) -> str:
        """Gera chave Redis da linha keyed."""
        return f"{self._prefix}{key.lower()}"

    def _log_key(self, key: str) -> str:
        """Gera chave Redis da lista de appends."""
        return f"{self._prefix}log:{key.lower()}"

    async def get(self, key: str) -> dict[str, str] | None:
        try:
            data = await self._redis.get(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar linha no Redis") from exc
        if data is not None:
            return _decode_row(data)
        appended = await self._read_log(key)
        return appended[-1] if appended else None

    async def put(self, key: str, row: dict[str, str], ttl_seconds: int) -> None:
        try:
            await self._redis.setex(self._key(key), ttl_seconds, json.dumps(row))
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar linha no Redis") from exc

    async def append(self, row: dict[str, str], ttl_seconds: int) -> None:
        key = row.get(self._key_column, "")
        entry = json.dumps({"row": row, "expires_at": self._clock() + ttl_seconds})
        log_key = self._log_key(key)
        try:
            pipeline = self._redis.pipeline()
            pipeline.rpush(log_key, entry)
            pipeline.ltrim(log_key, -MAX_LOG_ENTRIES_PER_KEY, -1)
            pipeline.expire(log_key, ttl_seconds)
            await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao registrar linha no Redis") from exc

    async def find(self, key: str) -> list[dict[str, str]]:
        try:
            data = await self._redis.get(self._key(key))
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar linha no Redis") from exc
        keyed = _decode_row(data) if data is not None else None
        rows = [keyed] if keyed is not None else []
        rows.extend(await self._read_log(key))
        return rows

    async def _read_log(self, key: str) -> list[dict[str, str]]:
        try:
            raw_entries = await self._redis.lrange(self._log_key(key), 0, -1)
        except Exception as exc:
            raise RedisConnectionError("Falha ao ler lista no Redis") from exc

        now = self._clock()
        rows: list[dict[str, str]] = []
        for raw in raw_entries or []:
            entry = _decode_entry(raw)
            if entry is None:
                continue
            row, expires_at = entry
            if expires_at <= now:
                continue
            rows.append(row)
        return rows


def _decode(raw: Any) -> Any:
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        return json.loads(text)
    except (TypeError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("redis_row_parse_error")
        return None


def _decode_row(raw: Any) -> dict[str, str] | None:
    row = _decode(raw)
    return row if isinstance(row, dict) else None


def _decode_entry(raw: Any) -> tuple[dict[str, str], float] | None:
    """Item da lista de appends; itens corrompidos contam como ausentes."""
    entry = _decode(raw)
    if not isinstance(entry, dict):
        return None
    row = entry.get("row") or {}
    try:
        expires_at = float(entry.get("expires_at", 0))
    except (TypeError, ValueError):
        expires_at = None
    if expires_at is None or not isinstance(row, dict):
        logger.warning("redis_row_parse_error")
        return None
    return row, expires_at
