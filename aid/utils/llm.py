"""Shared LLM call utilities: retry on transient errors, response text extraction."""

import sys

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception

TRANSIENT_STATUS_CODES = (429, 500, 502, 503)


def status_code(exc: BaseException) -> int | None:
    """Return the HTTP status carried by an exception, if any.

    httpx errors carry it on ``response``; Google API errors expose an
    integer ``code`` attribute.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    code = getattr(exc, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


def _is_transient(exc: BaseException) -> bool:
    """Return True if the exception is a transient HTTP/network error worth retrying."""
    if isinstance(exc, (httpx.TimeoutException, httpx.ConnectError)):
        return True
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return True
    return status_code(exc) in TRANSIENT_STATUS_CODES


def invoke_with_retry(llm, messages, max_retries: int = 2):
    """Call llm.invoke(messages) with exponential backoff on transient errors.

    Retries on HTTP 429/500/502/503, connection errors, and timeouts.
    Non-transient errors (auth failures, bad requests) are raised immediately.
    """
    from aid.config import get_config

    config = get_config()
    retries = config.get("llm_max_retries", max_retries)
    min_wait = config.get("retry_min_wait_seconds", 2)
    multiplier = config.get("retry_wait_multiplier", 1)

    @retry(
        stop=stop_after_attempt(retries + 1),  # +1 because first attempt counts
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=16),
        retry=retry_if_exception(_is_transient),
        reraise=True,
        before_sleep=lambda state: print(
            f"[AID] Transient error: {state.outcome.exception()!r}. "
            f"Retrying in {state.next_action.sleep:.0f}s "
            f"(attempt {state.attempt_number}/{retries})...",
            file=sys.stderr,
        ),
    )
    def _invoke():
        return llm.invoke(messages)

    return _invoke()


def response_text(response) -> str:
    """Return the text of a chat model response.

    Content is usually a string, but Gemini may return a list of parts
    (strings or ``{"type": "text", "text": ...}`` dicts).
    """
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts).strip()
    return str(content).strip()
