"""Store em memória: apenas para desenvolvimento e testes.

ATENÇÃO: Não usar em staging/production. Sem persistência entre reinícios.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from app.protocols.validation_store import ValidationStoreProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


class MemoryTableStore(ValidationStoreProtocol):
    """Tabela em memória com expiração por linha, apenas dev/test."""

    def __init__(
        self,
        key_column: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._key_column = key_column
        self._clock = clock
        self._rows: list[tuple[dict[str, str], float]] = []  # (row, expires_at)

    def _matches(self, row: dict[str, str], key: str) -> bool:
        return row.get(self._key_column, "").lower() == key.lower()

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = self._clock()
        self._rows = [(row, expires_at) for row, expires_at in self._rows if expires_at > now]

    async def get(self, key: str) -> dict[str, str] | None:
        rows = await self.find(key)
        return rows[-1] if rows else None

    async def put(self, key: str, row: dict[str, str], ttl_seconds: int) -> None:
        self._cleanup_expired()
        entry = (dict(row), self._clock() + ttl_seconds)
        for index, (existing, _) in enumerate(self._rows):
            if self._matches(existing, key):
                self._rows[index] = entry
                return
        self._rows.append(entry)

    async def append(self, row: dict[str, str], ttl_seconds: int) -> None:
        self._cleanup_expired()
        self._rows.append((dict(row), self._clock() + ttl_seconds))

    async def find(self, key: str) -> list[dict[str, str]]:
        now = self._clock()
        return [
            dict(row)
            for row, expires_at in self._rows
            if expires_at > now and self._matches(row, key)
        ]

    def count(self) -> int:
        """Quantidade de linhas não expiradas (apenas para testes)."""
        self._cleanup_expired()
        return len(self._rows)
