"""
AI reply service using the OpenAI Chat Completions API.

Each diary entry gets one supportive reply. The API key belongs to the caller:
it is sent with the request that creates the entry, forwarded once, and never
stored or logged here.

Failures are reported as AIReplyError carrying one ReplyFailure kind so that
callers can branch on the cause without inspecting messages.
"""
import enum
import logging
from typing import Optional
import httpx
from deardiary.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are the user's private diary companion. "
    "Respond gently and honestly, in a calm and supportive tone."
)
REDACTED = "***"


class ReplyFailure(str, enum.Enum):
    """Why a reply could not be generated."""
    INVALID_KEY = "invalid_key"
    QUOTA_EXCEEDED = "quota_exceeded"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    NETWORK_ERROR = "network_error"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


FAILURE_MESSAGES = {
    ReplyFailure.INVALID_KEY: "Invalid OpenAI API key. Please check your API key and try again.",
    ReplyFailure.QUOTA_EXCEEDED: "OpenAI API quota exceeded. Please check your billing details and try again.",
    ReplyFailure.UPSTREAM_UNAVAILABLE: "OpenAI service temporarily unavailable. Please try again later.",
    ReplyFailure.NETWORK_ERROR: "Network error. Please check your internet connection.",
    ReplyFailure.EMPTY_RESPONSE: "No response generated from OpenAI. Please try again.",
    ReplyFailure.UNKNOWN: "Unable to generate AI response. Please try again.",
}


class AIReplyError(Exception):
    """A reply could not be generated; `kind` tells why."""

    def __init__(self, kind: ReplyFailure, message: Optional[str] = None):
        self.kind = kind
        self.message = message or FAILURE_MESSAGES[kind]
        super().__init__(self.message)


def classify_status(status_code: int) -> ReplyFailure:
    """Map a non-200 upstream status to a failure kind."""
    if status_code == 401:
        return ReplyFailure.INVALID_KEY
    if status_code == 429:
        return ReplyFailure.QUOTA_EXCEEDED
    if 500 <= status_code < 600:
        return ReplyFailure.UPSTREAM_UNAVAILABLE
    return ReplyFailure.UNKNOWN


def redact(text: str, secret: str) -> str:
    """Mask every occurrence of the caller's key before text reaches a log."""
    if not secret:
        return text
    return text.replace(secret, REDACTED)


def extract_reply(payload: dict) -> str:
    """Pull the assistant text out of a chat completion body."""
    choices = payload.get("choices") or [{}]
    message = choices[0].get("message") or {}
    content = message.get("content") or ""
    return content.strip()


async def generate_reply(
    content: str,
    api_key: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Ask the completion service for a reply to a diary entry.

    Args:
        content: The entry text (already trimmed and validated)
        api_key: The caller's OpenAI API key
        transport: Optional httpx transport, used by tests

    Returns:
        The reply text, at most AI_REPLY_MAX_LENGTH characters

    Raises:
        AIReplyError: with the classified failure kind
    """
    if not api_key or not api_key.strip():
        raise AIReplyError(ReplyFailure.INVALID_KEY, "OpenAI API key is required")

    request_body = {
        "model": settings.OPENAI_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": content},
        ],
        "max_tokens": settings.AI_MAX_TOKENS,
        "temperature": settings.AI_TEMPERATURE,
    }

    try:
        async with httpx.AsyncClient(timeout=settings.AI_REQUEST_TIMEOUT, transport=transport) as client:
            response = await client.post(
                settings.OPENAI_API_URL,
                headers={
                    "Authorization": f"Bearer {api_key.strip()}",
                    "Content-Type": "application/json",
                },
                json=request_body,
            )
    except (httpx.TimeoutException, httpx.NetworkError, httpx.ProxyError) as e:
        logger.warning("OpenAI request failed: %s", type(e).__name__)
        raise AIReplyError(ReplyFailure.NETWORK_ERROR)
    except httpx.HTTPError as e:
        logger.error("OpenAI request error: %s", type(e).__name__)
        raise AIReplyError(ReplyFailure.UNKNOWN)

    if response.status_code != 200:
        kind = classify_status(response.status_code)
        # Provider bodies are logged for diagnosis and never returned to clients
        logger.warning(
            "OpenAI API error %s (%s): %s",
            response.status_code, kind.value, redact(response.text, api_key.strip())[:500],
        )
        raise AIReplyError(kind)

    try:
        reply = extract_reply(response.json())
    except (ValueError, AttributeError, IndexError, KeyError, TypeError) as e:
        logger.error("Unreadable OpenAI response: %s", type(e).__name__)
        raise AIReplyError(ReplyFailure.UNKNOWN)

    if not reply:
        logger.warning("OpenAI returned an empty reply")
        raise AIReplyError(ReplyFailure.EMPTY_RESPONSE)

    return reply[:settings.AI_REPLY_MAX_LENGTH]
