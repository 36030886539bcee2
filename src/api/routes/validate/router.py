"""Endpoints de validação direta.

- POST /validate/email   {"email": "..."}       -> veredito
- POST /validate/emails  {"emails": ["...", ...]} -> {"results": [...]}
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.domain.verdict import SOURCE_API
from utils.errors import InputError

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_BATCH_SIZE = 1000


async def _read_json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InputError("Invalid JSON body") from exc
    if not isinstance(body, dict):
        raise InputError("Invalid JSON body")
    return body


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status.HTTP_400_BAD_REQUEST)


@router.post("/email")
async def validate_email(request: Request) -> JSONResponse:
    """Valida um único endereço (source "api")."""
    try:
        body = await _read_json_object(request)
    except InputError as exc:
        return _bad_request(str(exc))

    email = body.get("email")
    if not isinstance(email, str) or not email:
        return _bad_request("Email is required")

    service = request.app.state.container.validation_service
    try:
        verdict = await service.validate(email, source=SOURCE_API)
    except Exception as exc:
        logger.exception("validate_email_failed", extra={"error_type": type(exc).__name__})
        return JSONResponse(
            {"error": "Error validating email", "details": str(exc)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(verdict.to_dict())


@router.post("/emails")
async def validate_emails(request: Request) -> JSONResponse:
    """Valida uma lista de endereços, preservando a ordem."""
    try:
        body = await _read_json_object(request)
    except InputError as exc:
        return _bad_request(str(exc))

    emails = body.get("emails")
    if not isinstance(emails, list) or not emails:
        return _bad_request("Emails are required")
    if len(emails) > MAX_BATCH_SIZE:
        return _bad_request(f"At most {MAX_BATCH_SIZE} emails per request")

    service = request.app.state.container.validation_service
    verdicts = await service.validate_batch(emails)
    return JSONResponse({"results": [verdict.to_dict() for verdict in verdicts]})
