"""Controle de tasks assíncronas do processamento destacado do webhook HubSpot."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 100
DEFAULT_DRAIN_TIMEOUT_SECONDS = 30.0


class WebhookTaskRegistry:
    """Agenda tasks com limite de concorrência e as rastreia até o fim.

    Uma instância por aplicação (criada no lifespan e drenada no shutdown).
    """

    def __init__(self, max_concurrency: int = DEFAULT_MAX_CONCURRENCY) -> None:
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._active: set[asyncio.Task[Any]] = set()

    @property
    def active_count(self) -> int:
        return len(self._active)

    def schedule(self, coroutine: Awaitable[None], *, correlation_id: str) -> asyncio.Task[Any]:
        """Agenda a coroutine e retorna a task criada."""
        task = asyncio.create_task(self._run_with_limit(coroutine))
        self._active.add(task)
        task.add_done_callback(self._on_done)
        logger.info(
            "webhook_processing_scheduled",
            extra={
                "channel": "hubspot",
                "correlation_id": correlation_id,
                "active_tasks": len(self._active),
            },
        )
        return task

    async def _run_with_limit(self, coroutine: Awaitable[None]) -> None:
        async with self._semaphore:
            await coroutine

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._active.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "webhook_processing_task_failed",
                    extra={
                        "channel": "hubspot",
                        "error_type": type(exc).__name__,
                        "active_tasks": len(self._active),
                    },
                )

    async def drain(self, timeout_seconds: float = DEFAULT_DRAIN_TIMEOUT_SECONDS) -> int:
        """Aguarda tasks pendentes; cancela as que passarem do timeout.

        Returns:
            Quantidade de tasks canceladas.
        """
        if not self._active:
            return 0

        pending_now = list(self._active)
        logger.info(
            "webhook_processing_shutdown_wait",
            extra={
                "channel": "hubspot",
                "pending_tasks": len(pending_now),
                "timeout_seconds": timeout_seconds,
            },
        )
        _, pending = await asyncio.wait(pending_now, timeout=timeout_seconds)
        if not pending:
            return 0

        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        logger.warning(
            "webhook_processing_shutdown_cancelled",
            extra={"channel": "hubspot", "cancelled_tasks": len(pending)},
        )
        return len(pending)
