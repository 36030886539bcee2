"""Protocolos e contratos do core da aplicação."""

from .crm_client import CrmClientProtocol
from .validation_store import ValidationStoreProtocol

__all__ = [
    "CrmClientProtocol",
    "ValidationStoreProtocol",
]
