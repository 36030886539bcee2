"""Protocolo de persistência dos stores de validação.

Um único contrato serve as duas coleções (cache de e-mails válidos e log de
resultados). Implementações: CSV (arquivo), Redis e memória.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ValidationStoreProtocol(ABC):
    """Tabela de linhas planas (dict[str, str]) com chave e expiração.

    Cada tabela tem uma coluna-chave comparada sem diferenciar maiúsculas.
    Linha expirada é indistinguível de linha nunca gravada.

    Falhas de backend devem ser propagadas como StorageError.
    """

    @abstractmethod
    async def get(self, key: str) -> dict[str, str] | None:
        """Retorna a linha mais recente não expirada para a chave."""

    @abstractmethod
    async def put(self, key: str, row: dict[str, str], ttl_seconds: int) -> None:
        """Upsert por chave: reescreve a linha existente ou adiciona uma nova."""

    @abstractmethod
    async def append(self, row: dict[str, str], ttl_seconds: int) -> None:
        """Adiciona linha nova, com expiração própria (nunca sobrescreve)."""

    @abstractmethod
    async def find(self, key: str) -> list[dict[str, str]]:
        """Todas as linhas não expiradas da chave, em ordem de gravação."""
