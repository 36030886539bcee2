"""Exceções de domínio e de infraestrutura do serviço de validação."""

from __future__ import annotations


class InputError(ValueError):
    """Entrada ausente ou malformada (corpo de request, e-mail vazio)."""


class AuthError(PermissionError):
    """Falha de autenticação de webhook (assinatura ausente ou divergente)."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class StorageError(InfrastructureError):
    """Falha de leitura/escrita no backend de armazenamento."""


class RedisConnectionError(StorageError):
    """Falha de conexão/timeout ao acessar Redis."""
