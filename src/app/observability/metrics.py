"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas depois
pelo sistema de logs (BigQuery, CloudWatch Insights, etc.).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Veredito: contador de status por origem da validação

Uso:
    from app.observability import record_latency, record_verdict

    start = time.perf_counter()
    # ... operação ...
    record_latency("email_validation", "validate", (time.perf_counter() - start) * 1000)
    record_verdict("valid", source="api", corrected=False)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "email_validation")
        operation: Nome da operação (ex: "validate")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (default: o do contexto, via filter)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_verdict(status: str, *, source: str, corrected: bool) -> None:
    """Registra contador de veredito (sem o e-mail).

    Args:
        status: Status final do veredito
        source: Origem da validação (api, batch, hubspot-webhook)
        corrected: Se alguma regra de correção disparou
    """
    logger.info(
        "metric_verdict",
        extra={
            "metric_type": "counter",
            "status": status,
            "source": source,
            "corrected": corrected,
        },
    )
