"""Testes do modelo de veredito e das projeções persistidas."""

from __future__ import annotations

from app.domain.verdict import (
    KNOWN_VALID_COLUMNS,
    VALIDATION_RECORD_COLUMNS,
    KnownValidEntry,
    StepName,
    ValidationRecord,
    ValidationStatus,
    ValidationVerdict,
)


def test_start_keeps_original_and_current_equal() -> None:
    verdict = ValidationVerdict.start("User@Example.com")

    assert verdict.original_email == "User@Example.com"
    assert verdict.current_email == "User@Example.com"
    assert verdict.steps == []
    assert verdict.recheck_needed is True


def test_record_appends_steps_in_order() -> None:
    verdict = ValidationVerdict.start("a@b.co")
    verdict.record(StepName.FORMAT_CHECK, True)
    verdict.record(StepName.TYPO_CORRECTION, False, original="a@b.co", corrected="a@b.co")

    data = verdict.to_dict()

    assert [step["name"] for step in data["steps"]] == ["format_check", "typo_correction"]
    assert data["steps"][1]["original"] == "a@b.co"
    assert "error" not in data


def test_check_failed_uses_repr_for_non_strings() -> None:
    verdict = ValidationVerdict.check_failed(None, "boom")

    assert verdict.status is ValidationStatus.CHECK_FAILED
    assert verdict.original_email == "None"
    assert verdict.to_dict()["error"] == "boom"


def test_known_valid_entry_row_is_lowercase() -> None:
    entry = KnownValidEntry(email="John@Gmail.com", validated_at="2024-01-01T00:00:00+00:00")
    row = entry.to_row()

    assert row["email"] == "john@gmail.com"
    assert row["source"] == "validation-service"
    assert tuple(row) == KNOWN_VALID_COLUMNS


def test_validation_record_from_verdict() -> None:
    verdict = ValidationVerdict.start("JOHN+x@gmail.com")
    verdict.current_email = "john@gmail.com"
    verdict.status = ValidationStatus.VALID
    verdict.recheck_needed = False

    row = ValidationRecord.from_verdict(verdict, validated_at="t", source="api").to_row()

    assert row == {
        "original_email": "JOHN+x@gmail.com",
        "corrected_email": "john@gmail.com",
        "status": "valid",
        "validated_at": "t",
        "recheck_needed": "false",
        "source": "api",
    }
    assert tuple(row) == VALIDATION_RECORD_COLUMNS
