"""Testes do EmailValidationService (pipeline completo com stores em memória)."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.email_rules import CorrectionOptions
from app.domain.verdict import ValidationStatus
from app.infra.stores import MemoryTableStore, RedisTableStore
from app.services import EmailValidationService
from tests.fakes.fake_validation_stores import FailingStore

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _service(
    known_valid: object | None = None,
    log: object | None = None,
    options: CorrectionOptions | None = None,
) -> EmailValidationService:
    return EmailValidationService(
        known_valid if known_valid is not None else MemoryTableStore("email"),
        log if log is not None else MemoryTableStore("original_email"),
        options=options,
        now=lambda: FIXED_NOW,
    )


def _step_names(verdict) -> list[str]:
    return [step.name.value for step in verdict.steps]


class TestValidate:
    @pytest.mark.asyncio
    async def test_bad_format_has_single_step_and_no_recheck(self) -> None:
        log = MemoryTableStore("original_email")
        service = _service(log=log)

        verdict = await service.validate("not-an-email")

        assert verdict.status is ValidationStatus.INVALID
        assert verdict.sub_status == "bad_format"
        assert verdict.recheck_needed is False
        assert _step_names(verdict) == ["format_check"]
        rows = await log.find("not-an-email")
        assert len(rows) == 1
        assert rows[0]["status"] == "invalid"
        assert rows[0]["recheck_needed"] == "false"

    @pytest.mark.asyncio
    async def test_common_domain_is_valid_and_cached(self) -> None:
        known_valid = MemoryTableStore("email")
        service = _service(known_valid=known_valid)

        verdict = await service.validate("JOHN+promo@Gmail.com")

        assert verdict.status is ValidationStatus.VALID
        assert verdict.current_email == "john@gmail.com"
        assert verdict.original_email == "JOHN+promo@Gmail.com"
        assert verdict.was_corrected is True
        assert verdict.domain_valid is True
        assert verdict.recheck_needed is False
        assert _step_names(verdict) == [
            "format_check",
            "typo_correction",
            "known_valid_check",
            "domain_check",
        ]
        cached = await known_valid.get("JOHN@gmail.com")
        assert cached == {
            "email": "john@gmail.com",
            "validated_at": FIXED_NOW.isoformat(),
            "source": "validation-service",
        }

    @pytest.mark.asyncio
    async def test_unknown_domain_needs_recheck_and_is_not_cached(self) -> None:
        known_valid = MemoryTableStore("email")
        service = _service(known_valid=known_valid)

        verdict = await service.validate("someone@company.example")

        assert verdict.status is ValidationStatus.UNKNOWN
        assert verdict.recheck_needed is True
        assert verdict.domain_valid is False
        assert known_valid.count() == 0

    @pytest.mark.asyncio
    async def test_second_validation_hits_cache_without_new_write(self) -> None:
        known_valid = MemoryTableStore("email")
        log = MemoryTableStore("original_email")
        service = _service(known_valid=known_valid, log=log)

        await service.validate("user@gmial.com")
        second = await service.validate("user@gmial.com")

        assert second.status is ValidationStatus.VALID
        assert second.is_known_valid is True
        assert second.recheck_needed is False
        assert _step_names(second) == ["format_check", "typo_correction", "known_valid_check"]
        assert known_valid.count() == 1
        assert len(await log.find("user@gmial.com")) == 2

    @pytest.mark.asyncio
    async def test_cache_hit_for_non_common_domain(self) -> None:
        known_valid = MemoryTableStore("email")
        await known_valid.put(
            "ceo@company.example",
            {"email": "ceo@company.example", "validated_at": "x", "source": "manual"},
            3600,
        )
        service = _service(known_valid=known_valid)

        verdict = await service.validate("CEO@Company.example")

        assert verdict.status is ValidationStatus.VALID
        assert verdict.domain_valid is False
        assert verdict.recheck_needed is False

    @pytest.mark.asyncio
    async def test_correction_step_carries_details(self) -> None:
        verdict = await _service().validate("user@gmial.com")

        step = verdict.steps[1]
        assert step.outcome is True
        assert step.details == {"original": "user@gmial.com", "corrected": "user@gmail.com"}

    @pytest.mark.asyncio
    async def test_source_is_recorded_in_log(self) -> None:
        log = MemoryTableStore("original_email")
        service = _service(log=log)

        await service.validate("user@gmail.com", source="hubspot-webhook")

        rows = await log.find("user@gmail.com")
        assert rows[0]["source"] == "hubspot-webhook"

    @pytest.mark.asyncio
    async def test_disabled_alias_rule_keeps_plus(self) -> None:
        service = _service(options=CorrectionOptions(remove_gmail_aliases=False))

        verdict = await service.validate("john+promo@gmail.com")

        assert verdict.current_email == "john+promo@gmail.com"
        assert verdict.was_corrected is False


class TestStorageDegradation:
    @pytest.mark.asyncio
    async def test_lookup_failure_counts_as_not_found(self) -> None:
        service = _service(known_valid=FailingStore({"get"}))

        verdict = await service.validate("user@gmail.com")

        assert verdict.status is ValidationStatus.VALID
        assert verdict.is_known_valid is False
        assert verdict.recheck_needed is True
        assert verdict.steps[2].details == {"error": "storage_unavailable"}

    @pytest.mark.asyncio
    async def test_corrupt_redis_cache_entry_counts_as_not_found(self) -> None:
        client = MagicMock()
        client.get = AsyncMock(return_value=None)
        client.lrange = AsyncMock(return_value=[b'{"row": {}, "expires_at": "x"}'])
        client.setex = AsyncMock(return_value=True)
        service = _service(known_valid=RedisTableStore(client, "email", prefix="kv:"))

        verdict = await service.validate("someone@example.org")

        assert verdict.status is ValidationStatus.UNKNOWN
        assert verdict.is_known_valid is False

    @pytest.mark.asyncio
    async def test_known_valid_write_failure_forces_recheck(self) -> None:
        service = _service(known_valid=FailingStore({"put"}))

        verdict = await service.validate("user@gmail.com")

        assert verdict.status is ValidationStatus.VALID
        assert verdict.recheck_needed is True

    @pytest.mark.asyncio
    async def test_log_failure_never_reaches_caller(self) -> None:
        service = _service(log=FailingStore({"append"}, key_column="original_email"))

        verdict = await service.validate("user@gmail.com")

        assert verdict.status is ValidationStatus.VALID
        assert verdict.recheck_needed is True

    @pytest.mark.asyncio
    async def test_log_failure_keeps_bad_format_without_recheck(self) -> None:
        service = _service(log=FailingStore(key_column="original_email"))

        verdict = await service.validate("bad")

        assert verdict.status is ValidationStatus.INVALID
        assert verdict.recheck_needed is False

    @pytest.mark.asyncio
    async def test_everything_down_still_returns_verdict(self) -> None:
        service = _service(
            known_valid=FailingStore(),
            log=FailingStore(key_column="original_email"),
        )

        verdict = await service.validate("someone@company.example")

        assert verdict.status is ValidationStatus.UNKNOWN
        assert verdict.recheck_needed is True


class TestValidateBatch:
    @pytest.mark.asyncio
    async def test_preserves_input_order(self) -> None:
        emails = ["b@gmail.com", "bad", "a@company.example", "c@gmial.com"]

        verdicts = await _service().validate_batch(emails)

        assert [v.original_email for v in verdicts] == emails
        assert [v.status.value for v in verdicts] == ["valid", "invalid", "unknown", "valid"]

    @pytest.mark.asyncio
    async def test_item_failure_becomes_check_failed(self) -> None:
        verdicts = await _service().validate_batch(["a@gmail.com", None, "b@gmail.com"])

        assert [v.status for v in verdicts] == [
            ValidationStatus.VALID,
            ValidationStatus.CHECK_FAILED,
            ValidationStatus.VALID,
        ]
        assert verdicts[1].error
        assert verdicts[1].original_email == "None"

    @pytest.mark.asyncio
    async def test_batch_source_is_default(self) -> None:
        log = MemoryTableStore("original_email")

        await _service(log=log).validate_batch(["a@gmail.com"])

        assert (await log.get("a@gmail.com"))["source"] == "batch"

    @pytest.mark.asyncio
    async def test_empty_batch(self) -> None:
        assert await _service().validate_batch([]) == []
