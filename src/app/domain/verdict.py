"""Veredito de validação: resultado estruturado do pipeline.

Um ValidationVerdict é construído exclusivamente pelo EmailValidationService.
Os registros persistidos (KnownValidEntry, ValidationRecord) são projeções
planas do veredito, com valores em string para caber em qualquer backend
(CSV ou Redis).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ValidationStatus(Enum):
    """Status terminal do veredito."""

    INVALID = "invalid"
    VALID = "valid"
    UNKNOWN = "unknown"
    CHECK_FAILED = "check_failed"


class StepName(Enum):
    """Etapas do pipeline, na ordem de execução."""

    FORMAT_CHECK = "format_check"
    TYPO_CORRECTION = "typo_correction"
    KNOWN_VALID_CHECK = "known_valid_check"
    DOMAIN_CHECK = "domain_check"


SUB_STATUS_BAD_FORMAT = "bad_format"

# Tags de origem gravadas nos stores
SOURCE_API = "api"
SOURCE_BATCH = "batch"
SOURCE_HUBSPOT_WEBHOOK = "hubspot-webhook"
SOURCE_VALIDATION_SERVICE = "validation-service"


@dataclass(frozen=True)
class ValidationStep:
    """Registro de uma etapa executada (trilha de auditoria)."""

    name: StepName
    outcome: bool
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name.value, "outcome": self.outcome, **self.details}


@dataclass
class ValidationVerdict:
    """Resultado de um e-mail passando pelo pipeline.

    `steps` é append-only e espelha exatamente as etapas executadas.
    """

    original_email: str
    current_email: str
    format_valid: bool = False
    was_corrected: bool = False
    is_known_valid: bool = False
    domain_valid: bool = False
    status: ValidationStatus = ValidationStatus.UNKNOWN
    sub_status: str | None = None
    recheck_needed: bool = True
    steps: list[ValidationStep] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def start(cls, email: str) -> ValidationVerdict:
        """Cria veredito inicial para o endereço recebido."""
        return cls(original_email=email, current_email=email)

    @classmethod
    def check_failed(cls, email: Any, error: str) -> ValidationVerdict:
        """Veredito de item que falhou sem produzir resultado completo."""
        text = email if isinstance(email, str) else repr(email)
        return cls(
            original_email=text,
            current_email=text,
            status=ValidationStatus.CHECK_FAILED,
            error=error,
        )

    def record(self, name: StepName, outcome: bool, **details: Any) -> None:
        self.steps.append(ValidationStep(name=name, outcome=outcome, details=details))

    def to_dict(self) -> dict[str, Any]:
        """Serializa para resposta JSON da API."""
        data: dict[str, Any] = {
            "original_email": self.original_email,
            "current_email": self.current_email,
            "format_valid": self.format_valid,
            "was_corrected": self.was_corrected,
            "is_known_valid": self.is_known_valid,
            "domain_valid": self.domain_valid,
            "status": self.status.value,
            "sub_status": self.sub_status,
            "recheck_needed": self.recheck_needed,
            "steps": [step.to_dict() for step in self.steps],
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class KnownValidEntry:
    """Entrada do cache de e-mails confirmados (chave: e-mail minúsculo)."""

    email: str
    validated_at: str
    source: str = SOURCE_VALIDATION_SERVICE

    def to_row(self) -> dict[str, str]:
        return {
            "email": self.email.lower(),
            "validated_at": self.validated_at,
            "source": self.source,
        }


@dataclass(frozen=True)
class ValidationRecord:
    """Entrada append-only do log de resultados."""

    original_email: str
    corrected_email: str
    status: str
    validated_at: str
    recheck_needed: bool
    source: str

    @classmethod
    def from_verdict(
        cls,
        verdict: ValidationVerdict,
        *,
        validated_at: str,
        source: str,
    ) -> ValidationRecord:
        return cls(
            original_email=verdict.original_email,
            corrected_email=verdict.current_email,
            status=verdict.status.value,
            validated_at=validated_at,
            recheck_needed=verdict.recheck_needed,
            source=source,
        )

    def to_row(self) -> dict[str, str]:
        return {
            "original_email": self.original_email,
            "corrected_email": self.corrected_email,
            "status": self.status,
            "validated_at": self.validated_at,
            "recheck_needed": "true" if self.recheck_needed else "false",
            "source": self.source,
        }


# Layout das tabelas persistidas (coluna-chave primeiro)
KNOWN_VALID_COLUMNS: tuple[str, ...] = ("email", "validated_at", "source")
VALIDATION_RECORD_COLUMNS: tuple[str, ...] = (
    "original_email",
    "corrected_email",
    "status",
    "validated_at",
    "recheck_needed",
    "source",
)
