"""Stores: implementações concretas do ValidationStoreProtocol.

Módulos disponíveis:
    - csv_store: Tabela em arquivo CSV (backend padrão)
    - redis_store: Tabela em Redis (instâncias múltiplas)
    - memory_stores: Tabela em memória para desenvolvimento/testes
"""

from __future__ import annotations

from app.infra.stores.csv_store import CsvTableStore
from app.infra.stores.memory_stores import MemoryTableStore
from app.infra.stores.redis_store import RedisTableStore

__all__ = [
    "CsvTableStore",
    "MemoryTableStore",
    "RedisTableStore",
]
