"""Endpoint de webhook do HubSpot.

POST /webhooks/hubspot: eventos de contato (objeto único ou lista).

Fluxo:
1. Valida assinatura HMAC sobre o corpo bruto
2. Agenda o processamento no WebhookTaskRegistry da aplicação
3. Responde 200 "Processing" sem esperar o pipeline

Falhas do processamento destacado só aparecem em log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse

from api.connectors.hubspot.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id

if TYPE_CHECKING:
    from app.use_cases.hubspot import ProcessContactEventUseCase

logger = logging.getLogger(__name__)

router = APIRouter()


async def _process_events_safe(
    *,
    events: list[dict[str, Any]],
    correlation_id: str,
    use_case: ProcessContactEventUseCase,
) -> None:
    """Executa o lote em background sem propagar exceções."""
    token = set_correlation_id(correlation_id)
    try:
        results = await use_case.execute_many(events)
        logger.info(
            "hubspot_events_processed",
            extra={
                "received": len(events),
                "validated": sum(1 for result in results if result.success),
                "crm_updated": sum(1 for result in results if result.crm_updated),
            },
        )
    except Exception:
        logger.exception(
            "hubspot_event_processing_failed",
            extra={"correlation_id": correlation_id},
        )
    finally:
        reset_correlation_id(token)


@router.post("", response_class=PlainTextResponse)
async def receive_webhook(request: Request) -> Response:
    """Recebe eventos de contato do HubSpot.

    Returns:
        200 "Processing", 401 "Unauthorized" ou 400 "Bad Request".
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))
    try:
        container = request.app.state.container
        raw_body = await request.body()

        try:
            events, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                secret=container.hubspot_settings.client_secret or None,
                skip_signature=container.skip_signature_verification,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={"channel": "hubspot", "error": str(exc)},
            )
            return PlainTextResponse("Unauthorized", status_code=status.HTTP_401_UNAUTHORIZED)
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={"channel": "hubspot", "error": str(exc)},
            )
            return PlainTextResponse("Bad Request", status_code=status.HTTP_400_BAD_REQUEST)

        logger.info(
            "webhook_received",
            extra={
                "channel": "hubspot",
                "signature_skipped": signature_result.skipped,
                "event_count": len(events),
                "payload_size": len(raw_body),
            },
        )

        container.task_registry.schedule(
            _process_events_safe(
                events=events,
                correlation_id=get_correlation_id(),
                use_case=container.contact_event_use_case,
            ),
            correlation_id=get_correlation_id(),
        )
        return PlainTextResponse("Processing", status_code=status.HTTP_200_OK)
    finally:
        reset_correlation_id(token)
