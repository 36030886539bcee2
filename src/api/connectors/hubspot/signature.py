"""Verificação de assinatura HMAC-SHA256 dos webhooks HubSpot."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.settings.hubspot import SIGNATURE_HEADER

if TYPE_CHECKING:
    from collections.abc import Mapping

_SIGNATURE_PREFIX = "sha256="


@dataclass(frozen=True)
class SignatureResult:
    """Resultado da verificação (sem expor valores de assinatura)."""

    valid: bool
    skipped: bool = False
    error: str | None = None


def compute_signature(raw_body: bytes, secret: str) -> str:
    """HMAC-SHA256 hexadecimal do corpo bruto."""
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def verify_hubspot_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    skip: bool = False,
) -> SignatureResult:
    """Valida o header de assinatura contra o corpo bruto.

    Args:
        raw_body: Corpo exatamente como recebido
        headers: Headers do request (busca case-insensitive)
        secret: HUBSPOT_CLIENT_SECRET
        skip: Bypass já autorizado pelo chamador (nunca em produção)

    Returns:
        SignatureResult; `error` é um código curto quando inválido.
    """
    if skip:
        return SignatureResult(valid=True, skipped=True)

    if not secret:
        return SignatureResult(valid=False, error="missing_secret")

    received = _get_header(headers, SIGNATURE_HEADER)
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    received = received.strip()
    if received.lower().startswith(_SIGNATURE_PREFIX):
        received = received[len(_SIGNATURE_PREFIX) :]

    # compare_digest com str rejeita não-ASCII; headers chegam como latin-1
    expected = compute_signature(raw_body, secret).encode("ascii")
    provided = received.lower().encode("utf-8", "surrogateescape")
    if not hmac.compare_digest(expected, provided):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None
