"""Protocolo do cliente de CRM usado para devolver o veredito ao contato."""

from __future__ import annotations

from typing import Any, Protocol


class CrmClientProtocol(Protocol):
    """Contrato mínimo para atualizar propriedades de um contato."""

    async def update_contact(self, contact_id: str, properties: dict[str, str]) -> Any: ...
