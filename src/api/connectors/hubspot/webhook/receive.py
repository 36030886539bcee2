"""Parse e validação inicial do webhook HubSpot (sem PII)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from utils.errors import AuthError, InputError

from ..signature import SignatureResult, verify_hubspot_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(Exception):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError, AuthError):
    """Assinatura ausente, secret ausente ou divergente."""


class InvalidJsonError(WebhookRequestError, InputError):
    """Corpo não é JSON, ou não é objeto/lista de objetos."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
    skip_signature: bool = False,
) -> tuple[list[dict[str, Any]], SignatureResult]:
    """Valida assinatura e parseia os eventos do webhook.

    O HubSpot entrega lotes como lista JSON; um objeto único vira lista
    de um elemento.

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido ou fora do formato

    Returns:
        (eventos, SignatureResult)
    """
    signature_result = verify_hubspot_signature(raw_body, headers, secret, skip=skip_signature)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if isinstance(payload, dict):
        return [payload], signature_result

    if isinstance(payload, list) and all(isinstance(item, dict) for item in payload):
        return payload, signature_result

    raise InvalidJsonError("payload_not_object")
