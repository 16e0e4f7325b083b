"""Google reCAPTCHA verification for the public submission form."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


async def verify_recaptcha(token: str, settings: Settings) -> bool:
    """
    Ask Google's siteverify endpoint whether token is valid.

    A missing secret, an unreachable endpoint or an unexpected response all count
    as a failed verification.
    """
    if settings.RECAPTCHA_SECRET_KEY is None:
        logger.error("RECAPTCHA_SECRET_KEY is not set; rejecting submission")
        return False
    secret = settings.RECAPTCHA_SECRET_KEY.get_secret_value()
    if not secret.strip():
        logger.error("RECAPTCHA_SECRET_KEY is empty; rejecting submission")
        return False

    timeout = max(1.0, min(60.0, settings.RECAPTCHA_TIMEOUT_SEC))
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.post(
                settings.RECAPTCHA_VERIFY_URL,
                data={"secret": secret, "response": token},
                timeout=timeout,
            )
    except httpx.HTTPError as e:
        logger.warning("reCAPTCHA verification request failed: %s", type(e).__name__)
        return False

    if resp.status_code >= 400:
        logger.warning("reCAPTCHA verification returned %s", resp.status_code)
        return False
    try:
        body = resp.json()
    except ValueError:
        logger.warning("reCAPTCHA verification returned a non-JSON body")
        return False
    success = bool(body.get("success")) if isinstance(body, dict) else False
    if not success:
        logger.info(
            "reCAPTCHA rejected token",
            extra={"error_codes": body.get("error-codes", []) if isinstance(body, dict) else []},
        )
    return success
