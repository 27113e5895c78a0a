"""
Chat proxy to the Gemini generateContent REST API.
"""

from typing import Optional

import httpx

from venue_platform.core.config import Settings, get_settings
from venue_platform.core.logging import get_logger

logger = get_logger(__name__)


class ChatError(Exception):
    """Carries the HTTP status and reply text the endpoint should return."""

    def __init__(self, status_code: int, reply: str):
        super().__init__(reply)
        self.status_code = status_code
        self.reply = reply


def extract_reply(payload: dict) -> str:
    """Join the text parts of the first candidate."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts).strip()


async def ask_model(
    message: str,
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Send `message` to the configured model and return its text reply.

    Raises ChatError with 400 for an empty message, 500 when no API key is
    configured, 502 when the model answers without text, and 500 carrying an
    echo of the message when the upstream call itself fails.
    """
    settings = settings or get_settings()

    if not message or not message.strip():
        raise ChatError(400, "Message cannot be empty")
    if not settings.GEMINI_API_KEY:
        raise ChatError(500, "Chat is not configured: GEMINI_API_KEY is missing")

    url = f"{settings.GEMINI_BASE_URL}/v1/models/{settings.GEMINI_MODEL}:generateContent"
    payload = {"contents": [{"role": "user", "parts": [{"text": message}]}]}

    try:
        async with httpx.AsyncClient(timeout=settings.CHAT_TIMEOUT_SECONDS, transport=transport) as client:
            response = await client.post(url, headers={"x-goog-api-key": settings.GEMINI_API_KEY}, json=payload)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        status_code = e.response.status_code if isinstance(e, httpx.HTTPStatusError) else None
        logger.error("chat_upstream_failed", error_type=type(e).__name__, upstream_status=status_code)
        raise ChatError(500, f'I understood what you said: "{message}"') from e

    text = extract_reply(data)
    if not text:
        logger.warning("chat_empty_reply", model=settings.GEMINI_MODEL)
        raise ChatError(502, "No reply received from the model.")

    logger.info("chat_reply", model=settings.GEMINI_MODEL, reply_chars=len(text))
    return text
