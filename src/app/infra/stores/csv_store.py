"""CSV Table Store: tabela persistida em arquivo plano.

Backend padrão para instalações de instância única:
- Arquivo (e diretório) criado sob demanda com cabeçalho na primeira escrita
- Leitura por varredura completa do arquivo
- `append` e chave nova: append no fim do arquivo
- `put` de chave existente: reescrita completa (compacta linhas expiradas)

I/O bloqueante roda em `asyncio.to_thread` para não travar o event loop.
"""

from __future__ import annotations

import asyncio
import csv
import logging
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from app.protocols.validation_store import ValidationStoreProtocol
from utils.errors import StorageError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)

EXPIRES_AT_COLUMN = "expires_at"


class CsvTableStore(ValidationStoreProtocol):
    """Tabela CSV com coluna-chave case-insensitive e expiração por linha.

    Cabeçalho: nomes das colunas em maiúsculas + EXPIRES_AT (epoch).
    Linhas sem EXPIRES_AT (arquivos legados) nunca expiram.

    Args:
        path: Caminho do arquivo CSV
        columns: Colunas da tabela, na ordem do arquivo
        key_column: Coluna usada como chave
        clock: Fonte de tempo (epoch em segundos)
    """

    def __init__(
        self,
        path: str | Path,
        columns: Sequence[str],
        key_column: str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if key_column not in columns:
            msg = f"key_column {key_column!r} não pertence às colunas"
            raise ValueError(msg)
        self._path = Path(path)
        self._columns = tuple(columns)
        self._key_column = key_column
        self._clock = clock
        self._fieldnames = [column.upper() for column in (*self._columns, EXPIRES_AT_COLUMN)]
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # ──────────────────────────────────────────────────────────────
    # API async (ValidationStoreProtocol)
    # ──────────────────────────────────────────────────────────────

    async def get(self, key: str) -> dict[str, str] | None:
        rows = await self.find(key)
        return rows[-1] if rows else None

    async def find(self, key: str) -> list[dict[str, str]]:
        rows = await asyncio.to_thread(self._read_rows)
        now = self._clock()
        return [
            self._strip(row)
            for row in rows
            if self._matches(row, key) and not self._is_expired(row, now)
        ]

    async def put(self, key: str, row: dict[str, str], ttl_seconds: int) -> None:
        async with self._lock:
            await asyncio.to_thread(self._put_sync, key, row, ttl_seconds)

    async def append(self, row: dict[str, str], ttl_seconds: int) -> None:
        async with self._lock:
            await asyncio.to_thread(self._append_rows, [self._to_record(row, ttl_seconds)])

    # ──────────────────────────────────────────────────────────────
    # Implementação sync (executada em thread)
    # ──────────────────────────────────────────────────────────────

    def _put_sync(self, key: str, row: dict[str, str], ttl_seconds: int) -> None:
        record = self._to_record(row, ttl_seconds)
        rows = self._read_rows()
        index = next((i for i, existing in enumerate(rows) if self._matches(existing, key)), None)
        if index is None:
            self._append_rows([record])
            return

        now = self._clock()
        rows[index] = record
        kept = [r for i, r in enumerate(rows) if i == index or not self._is_expired(r, now)]
        self._rewrite(kept)
        logger.debug("csv_row_rewritten", extra={"path": str(self._path), "rows": len(kept)})

    def _read_rows(self) -> list[dict[str, str]]:
        if not self._path.exists():
            return []
        try:
            with self._path.open(newline="", encoding="utf-8") as handle:
                reader = csv.DictReader(handle)
                return [
                    {(name or "").lower(): value or "" for name, value in raw.items()}
                    for raw in reader
                ]
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            raise StorageError(f"Falha ao ler {self._path.name}") from exc

    def _append_rows(self, records: list[dict[str, str]]) -> None:
        try:
            self._ensure_file()
            with self._path.open("a", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=self._fieldnames)
                writer.writerows(self._to_csv(record) for record in records)
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            raise StorageError(f"Falha ao gravar {self._path.name}") from exc

    def _rewrite(self, records: list[dict[str, str]]) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with tmp_path.open("w", newline="", encoding="utf-8") as handle:
                writer = csv.DictWriter(handle, fieldnames=self._fieldnames)
                writer.writeheader()
                writer.writerows(self._to_csv(record) for record in records)
            os.replace(tmp_path, self._path)
        except (OSError, csv.Error) as exc:
            raise StorageError(f"Falha ao reescrever {self._path.name}") from exc

    def _ensure_file(self) -> None:
        if self._path.exists():
            if self._read_header() != self._fieldnames:
                self._upgrade_header()
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", newline="", encoding="utf-8") as handle:
            csv.DictWriter(handle, fieldnames=self._fieldnames).writeheader()
        logger.info("csv_table_created", extra={"path": str(self._path)})

    def _read_header(self) -> list[str]:
        with self._path.open(newline="", encoding="utf-8") as handle:
            header = next(csv.reader(handle), [])
        return [name.strip().upper() for name in header]

    def _upgrade_header(self) -> None:
        """Reescreve arquivo legado com o cabeçalho atual.

        Linhas antigas ficam com EXPIRES_AT vazio (nunca expiram).
        """
        rows = self._read_rows()
        self._rewrite(rows)
        logger.info(
            "csv_table_header_upgraded",
            extra={"path": str(self._path), "rows": len(rows)},
        )

    # ──────────────────────────────────────────────────────────────
    # Helpers
    # ──────────────────────────────────────────────────────────────

    def _to_record(self, row: dict[str, str], ttl_seconds: int) -> dict[str, str]:
        record = {column: str(row.get(column, "")) for column in self._columns}
        record[EXPIRES_AT_COLUMN] = f"{self._clock() + ttl_seconds:.3f}"
        return record

    def _to_csv(self, record: dict[str, str]) -> dict[str, str]:
        return {
            name.upper(): value
            for name, value in record.items()
            if name.upper() in self._fieldnames
        }

    def _strip(self, row: dict[str, str]) -> dict[str, str]:
        return {column: row.get(column, "") for column in self._columns}

    def _matches(self, row: dict[str, str], key: str) -> bool:
        return row.get(self._key_column, "").lower() == key.lower()

    @staticmethod
    def _is_expired(row: dict[str, str], now: float) -> bool:
        raw = row.get(EXPIRES_AT_COLUMN, "")
        if not raw:
            return False
        try:
            return float(raw) <= now
        except ValueError:
            return False
