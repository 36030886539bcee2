"""Pipeline de validação de e-mail.

Etapas, em ordem (cada etapa executada gera um ValidationStep):
1. format_check: formato mínimo; falha encerra como invalid/bad_format
2. typo_correction: regras puras de app/domain/email_rules (sempre registrada)
3. known_valid_check: cache de e-mails confirmados; hit encerra como valid
4. domain_check: heurística de provedores comuns (valid | unknown)

Efeitos:
- valid via domain_check grava KnownValidEntry (hit de cache não regrava)
- todo caminho terminal grava exatamente um ValidationRecord no log

Falhas de storage (StorageError) nunca chegam ao chamador: leitura falha
conta como "não encontrado", escrita falha como "não gravado", e em ambos
os casos o veredito fica com recheck_needed=True.
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.domain.email_rules import (
    CorrectionOptions,
    correct_email,
    get_domain,
    is_common_domain,
    is_valid_format,
)
from app.domain.verdict import (
    SOURCE_API,
    SOURCE_BATCH,
    SUB_STATUS_BAD_FORMAT,
    KnownValidEntry,
    StepName,
    ValidationRecord,
    ValidationStatus,
    ValidationVerdict,
)
from app.observability import record_latency, record_verdict
from config.logging import log_fallback
from utils.errors import StorageError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from app.protocols.validation_store import ValidationStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_KNOWN_VALID_TTL_SECONDS = 30 * 86400
DEFAULT_VALIDATION_LOG_TTL_SECONDS = 90 * 86400


def _utcnow() -> datetime:
    return datetime.now(UTC)


class EmailValidationService:
    """Orquestra regras de correção, cache de válidos e log de resultados.

    Args:
        known_valid_store: Tabela de e-mails confirmados (chave: e-mail)
        validation_log: Tabela append-only de resultados
        options: Regras opcionais de correção
        known_valid_ttl_seconds: Retenção das entradas de cache
        validation_log_ttl_seconds: Retenção das entradas de log
        now: Relógio UTC (injetável em testes)
    """

    def __init__(
        self,
        known_valid_store: ValidationStoreProtocol,
        validation_log: ValidationStoreProtocol,
        *,
        options: CorrectionOptions | None = None,
        known_valid_ttl_seconds: int = DEFAULT_KNOWN_VALID_TTL_SECONDS,
        validation_log_ttl_seconds: int = DEFAULT_VALIDATION_LOG_TTL_SECONDS,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._known_valid = known_valid_store
        self._log = validation_log
        self._options = options or CorrectionOptions()
        self._known_valid_ttl = known_valid_ttl_seconds
        self._log_ttl = validation_log_ttl_seconds
        self._now = now

    async def validate(self, email: str, source: str = SOURCE_API) -> ValidationVerdict:
        """Executa o pipeline completo para um endereço.

        Args:
            email: Endereço como recebido (nunca alterado no veredito)
            source: Origem gravada no log (api, batch, hubspot-webhook)

        Returns:
            ValidationVerdict com status terminal e trilha de etapas.
        """
        started_at = time.perf_counter()
        verdict = ValidationVerdict.start(email)

        verdict.format_valid = is_valid_format(email)
        verdict.record(StepName.FORMAT_CHECK, verdict.format_valid)
        if not verdict.format_valid:
            verdict.status = ValidationStatus.INVALID
            verdict.sub_status = SUB_STATUS_BAD_FORMAT
            verdict.recheck_needed = False
            return await self._finish(verdict, source, started_at)

        correction = correct_email(email, self._options)
        verdict.was_corrected = correction.corrected
        verdict.current_email = correction.email
        verdict.record(
            StepName.TYPO_CORRECTION,
            correction.corrected,
            original=email,
            corrected=correction.email,
        )

        lookup_failed = False
        try:
            verdict.is_known_valid = await self._is_known_valid(verdict.current_email)
        except StorageError as exc:
            lookup_failed = True
            log_fallback(logger, "known_valid_lookup", reason=type(exc).__name__)

        if lookup_failed:
            verdict.record(StepName.KNOWN_VALID_CHECK, False, error="storage_unavailable")
        else:
            verdict.record(StepName.KNOWN_VALID_CHECK, verdict.is_known_valid)

        if verdict.is_known_valid:
            verdict.status = ValidationStatus.VALID
            verdict.recheck_needed = False
            return await self._finish(verdict, source, started_at)

        # Sem API externa: a heurística de domínio decide o status final
        verdict.domain_valid = is_common_domain(verdict.current_email)
        verdict.record(StepName.DOMAIN_CHECK, verdict.domain_valid)
        verdict.status = (
            ValidationStatus.VALID if verdict.domain_valid else ValidationStatus.UNKNOWN
        )
        verdict.recheck_needed = not verdict.domain_valid or lookup_failed

        if verdict.status is ValidationStatus.VALID:
            remembered = await self._remember_valid(verdict.current_email)
            if not remembered:
                verdict.recheck_needed = True

        return await self._finish(verdict, source, started_at)

    async def validate_batch(
        self,
        emails: Iterable[Any],
        source: str = SOURCE_BATCH,
    ) -> list[ValidationVerdict]:
        """Valida endereços um a um, preservando a ordem de entrada.

        Falha de um item vira veredito check_failed com a mensagem do erro,
        sem interromper os demais.
        """
        results: list[ValidationVerdict] = []
        for email in emails:
            try:
                results.append(await self.validate(email, source=source))
            except Exception as exc:
                logger.warning(
                    "batch_item_failed",
                    extra={"source": source, "error_type": type(exc).__name__},
                )
                results.append(ValidationVerdict.check_failed(email, str(exc)))
        return results

    async def _is_known_valid(self, email: str) -> bool:
        return await self._known_valid.get(email.lower()) is not None

    async def _remember_valid(self, email: str) -> bool:
        entry = KnownValidEntry(email=email, validated_at=self._now().isoformat())
        try:
            await self._known_valid.put(email.lower(), entry.to_row(), self._known_valid_ttl)
        except StorageError as exc:
            log_fallback(logger, "known_valid_write", reason=type(exc).__name__)
            return False
        return True

    async def _finish(
        self,
        verdict: ValidationVerdict,
        source: str,
        started_at: float,
    ) -> ValidationVerdict:
        record = ValidationRecord.from_verdict(
            verdict,
            validated_at=self._now().isoformat(),
            source=source,
        )
        try:
            await self._log.append(record.to_row(), self._log_ttl)
        except StorageError as exc:
            log_fallback(logger, "validation_log_write", reason=type(exc).__name__)
            if verdict.status is not ValidationStatus.INVALID:
                verdict.recheck_needed = True

        logger.info(
            "email_validated",
            extra={
                "status": verdict.status.value,
                "sub_status": verdict.sub_status,
                "was_corrected": verdict.was_corrected,
                "recheck_needed": verdict.recheck_needed,
                "domain": get_domain(verdict.current_email),
                "source": source,
            },
        )
        record_verdict(verdict.status.value, source=source, corrected=verdict.was_corrected)
        record_latency(
            "email_validation",
            "validate",
            (time.perf_counter() - started_at) * 1000,
        )
        return verdict
