"""API-key check for the /api/v1 endpoints."""
from __future__ import annotations

import hmac
import logging

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from config import settings

logger = logging.getLogger(__name__)

api_key_scheme = APIKeyHeader(name=settings.api_key_header, auto_error=False)


def require_api_key(supplied: str | None = Security(api_key_scheme)) -> None:
    if not supplied or not hmac.compare_digest(supplied, settings.api_key):
        logger.warning("Unauthorized access attempt with invalid API key.")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API key.")
