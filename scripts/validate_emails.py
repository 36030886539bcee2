#!/usr/bin/env python3
"""Valida em lote um arquivo com um e-mail por linha.

Uso:
    python scripts/validate_emails.py --input emails.txt
    python scripts/validate_emails.py --input emails.txt --source import-2024

Usa os mesmos stores configurados para o serviço (STORAGE_BACKEND etc.).
Imprime um veredito JSON por linha e um resumo no final.
"""

from __future__ import annotations

import argparse
import asyncio
import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from app.bootstrap import build_app_container, close_container, initialize_app
from app.domain.verdict import SOURCE_BATCH

if TYPE_CHECKING:
    from collections.abc import Iterable

    from app.services import EmailValidationService


@dataclass
class BatchStats:
    total: int = 0
    corrected: int = 0
    by_status: Counter[str] = field(default_factory=Counter)


def read_addresses(lines: Iterable[str]) -> list[str]:
    """Remove linhas vazias e comentários (#)."""
    addresses: list[str] = []
    for line in lines:
        text = line.strip()
        if text and not text.startswith("#"):
            addresses.append(text)
    return addresses


async def validate_addresses(
    service: EmailValidationService,
    addresses: list[str],
    source: str,
) -> tuple[list[dict[str, object]], BatchStats]:
    verdicts = await service.validate_batch(addresses, source=source)
    stats = BatchStats(total=len(verdicts))
    for verdict in verdicts:
        stats.by_status[verdict.status.value] += 1
        if verdict.was_corrected:
            stats.corrected += 1
    return [verdict.to_dict() for verdict in verdicts], stats


async def run(input_path: Path, source: str) -> BatchStats:
    container = build_app_container()
    try:
        with input_path.open(encoding="utf-8") as handle:
            addresses = read_addresses(handle)
        results, stats = await validate_addresses(container.validation_service, addresses, source)
    finally:
        await close_container(container, drain_timeout_seconds=1.0)

    for result in results:
        print(json.dumps(result, ensure_ascii=False))
    return stats


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--input",
        required=True,
        type=Path,
        help="Arquivo texto com um e-mail por linha.",
    )
    parser.add_argument(
        "--source",
        default=SOURCE_BATCH,
        help="Tag de origem gravada no log de resultados.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    initialize_app()
    stats = asyncio.run(run(args.input, args.source))
    statuses = " ".join(f"{status}={count}" for status, count in sorted(stats.by_status.items()))
    print(f"[{args.source}] total={stats.total} corrected={stats.corrected} {statuses}")


if __name__ == "__main__":
    main()
