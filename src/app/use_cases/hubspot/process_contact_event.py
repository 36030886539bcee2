"""Use case de processamento de eventos de contato vindos do HubSpot.

Roda na fase destacada do webhook: o request já foi respondido, então
nada aqui influencia o status HTTP.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.verdict import SOURCE_HUBSPOT_WEBHOOK
from app.infra.http import HttpError
from app.use_cases.hubspot._contact_event import (
    ALLOWED_SUBSCRIPTION_TYPES,
    build_crm_properties,
    extract_contact_id,
    extract_email,
    extract_subscription_type,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from app.domain.verdict import ValidationVerdict
    from app.protocols import CrmClientProtocol
    from app.services import EmailValidationService

logger = logging.getLogger(__name__)

REASON_VALIDATED = "validated"
REASON_SUBSCRIPTION_SKIPPED = "subscription_type_skipped"
REASON_NO_EMAIL = "no_email"


@dataclass(frozen=True, slots=True)
class ContactEventResult:
    """Resultado do processamento de um evento."""

    success: bool
    reason: str
    contact_id: str | None = None
    subscription_type: str | None = None
    verdict: ValidationVerdict | None = None
    crm_updated: bool = False


class ProcessContactEventUseCase:
    """Valida o e-mail do contato e, opcionalmente, devolve o veredito ao CRM."""

    def __init__(
        self,
        *,
        validation_service: EmailValidationService,
        crm_client: CrmClientProtocol | None = None,
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._validation = validation_service
        self._crm = crm_client
        self._now = now

    async def execute(self, event: Mapping[str, Any]) -> ContactEventResult:
        """Processa um único evento.

        Returns:
            ContactEventResult; eventos ignorados retornam success=False
            com o motivo.
        """
        subscription_type = extract_subscription_type(event)
        contact_id = extract_contact_id(event)

        if subscription_type not in ALLOWED_SUBSCRIPTION_TYPES:
            logger.info(
                "hubspot_event_skipped",
                extra={
                    "reason": REASON_SUBSCRIPTION_SKIPPED,
                    "subscription_type": subscription_type,
                },
            )
            return ContactEventResult(
                success=False,
                reason=REASON_SUBSCRIPTION_SKIPPED,
                contact_id=contact_id,
                subscription_type=subscription_type,
            )

        email = extract_email(event)
        if email is None:
            logger.info(
                "hubspot_event_skipped",
                extra={"reason": REASON_NO_EMAIL, "contact_id": contact_id},
            )
            return ContactEventResult(
                success=False,
                reason=REASON_NO_EMAIL,
                contact_id=contact_id,
                subscription_type=subscription_type,
            )

        verdict = await self._validation.validate(email, source=SOURCE_HUBSPOT_WEBHOOK)
        crm_updated = await self._push_verdict(contact_id, verdict)

        return ContactEventResult(
            success=True,
            reason=REASON_VALIDATED,
            contact_id=contact_id,
            subscription_type=subscription_type,
            verdict=verdict,
            crm_updated=crm_updated,
        )

    async def execute_many(self, events: Iterable[Mapping[str, Any]]) -> list[ContactEventResult]:
        """Processa um lote; falha de um evento não interrompe os demais."""
        results: list[ContactEventResult] = []
        for event in events:
            try:
                results.append(await self.execute(event))
            except Exception:
                logger.exception(
                    "hubspot_event_processing_failed",
                    extra={"contact_id": extract_contact_id(event)},
                )
        return results

    async def _push_verdict(self, contact_id: str | None, verdict: ValidationVerdict) -> bool:
        if self._crm is None or contact_id is None:
            return False
        properties = build_crm_properties(verdict, self._now())
        try:
            await self._crm.update_contact(contact_id, properties)
        except HttpError as exc:
            logger.warning(
                "hubspot_contact_push_failed",
                extra={"contact_id": contact_id, "status_code": exc.status_code},
            )
            return False
        return True
