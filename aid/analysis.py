"""Analysis Client — asks Gemini to critique a draft and classifies failures.

Every failure is converted into an AnalysisResult; nothing raised by the
model client escapes ``analyze``.

Result shape:
{
  "ok": bool,
  "text": "critique (success only)",
  "kind": "MissingCredential | NetworkError | QuotaOrPermission | Unknown (failure only)",
  "message": "human-readable failure text (failure only)"
}
"""

import sys
from typing import Literal, TypedDict

import httpx
from langchain_google_genai import ChatGoogleGenerativeAI

from aid.config import get_api_key, get_config
from aid.utils.llm import invoke_with_retry, response_text, status_code

ErrorKind = Literal["MissingCredential", "NetworkError", "QuotaOrPermission", "Unknown"]

MISSING_CREDENTIAL = "MissingCredential"
NETWORK_ERROR = "NetworkError"
QUOTA_OR_PERMISSION = "QuotaOrPermission"
UNKNOWN = "Unknown"

ERROR_MESSAGES = {
    NETWORK_ERROR: "Network connection issue. Please check your internet connection.",
    QUOTA_OR_PERMISSION: (
        "API key permissions or quota exceeded. Please check your API key settings."
    ),
}

REVIEW_PROMPT = """\
Review this code and provide VSCode-style feedback in the following format:

error type
cause of error

Code:
{code}"""

EXPLAIN_PROMPT = """\
Provide a simple error explanation for this code. Only focus on the error, no extra information.
If it's a syntax error, start with ❗, if it's a runtime error, start with ⚠️.
Explain what's wrong and how to fix it in 1-2 sentences.

Code:
{code}

Error: {error}"""


class AnalysisResult(TypedDict, total=False):
    ok: bool
    text: str
    kind: ErrorKind
    message: str


class MissingCredentialError(RuntimeError):
    """Raised when no Gemini API key is configured."""


def missing_credential_message() -> str:
    env_name = get_config().get("api_key_env", "GOOGLE_API_KEY")
    return f"Gemini API key is missing. Please add {env_name} to your .env file."


def rejected_credential_message() -> str:
    env_name = get_config().get("api_key_env", "GOOGLE_API_KEY")
    return f"Gemini API key was rejected. Please check that {env_name} in your .env file is valid."


def build_prompt(code: str, error_context: str | None = None) -> str:
    """Return the critique prompt, or the targeted fix prompt when an error is given."""
    if error_context:
        return EXPLAIN_PROMPT.format(code=code, error=error_context)
    return REVIEW_PROMPT.format(code=code)


def classify_error(exc: BaseException) -> ErrorKind:
    """Map a model-call failure to an ErrorKind.

    Exception types and HTTP status codes are checked first; message
    sniffing only decides what is left.
    """
    if isinstance(exc, MissingCredentialError):
        return MISSING_CREDENTIAL
    if isinstance(exc, (httpx.TimeoutException, httpx.ConnectError, ConnectionError, TimeoutError)):
        return NETWORK_ERROR

    code = status_code(exc)
    if code == 401:
        return MISSING_CREDENTIAL
    if code in (403, 429):
        return QUOTA_OR_PERMISSION

    message = str(exc)
    if "API key" in message:
        return MISSING_CREDENTIAL
    if "network" in message.lower():
        return NETWORK_ERROR
    if "permission" in message.lower() or "quota" in message.lower():
        return QUOTA_OR_PERMISSION
    return UNKNOWN


def describe_error(kind: ErrorKind, exc: BaseException) -> str:
    """Return the user-facing message for a classified failure."""
    if kind == MISSING_CREDENTIAL:
        if status_code(exc) == 401:
            return rejected_credential_message()
        message = str(exc)
        return message if "API key" in message else missing_credential_message()
    if kind in ERROR_MESSAGES:
        return ERROR_MESSAGES[kind]
    return f"Error analyzing code: {exc}. Please try again."


def _failure(exc: BaseException) -> AnalysisResult:
    kind = classify_error(exc)
    message = describe_error(kind, exc)
    print(f"[AID] Analysis failed ({kind}): {exc}", file=sys.stderr)
    return {"ok": False, "kind": kind, "message": message}


def create_llm(api_key: str):
    """Construct the configured Gemini chat model."""
    config = get_config()
    return ChatGoogleGenerativeAI(
        model=config.get("model", "gemini-1.5-pro"),
        temperature=config.get("temperature", 0),
        timeout=config.get("request_timeout_seconds"),
        google_api_key=api_key,
    )


def analyze(code: str, error_context: str | None = None, llm=None) -> AnalysisResult:
    """Ask the model to critique ``code``; never raises.

    With ``error_context`` the model is asked for a short, targeted fix
    explanation instead of a general review. When no API key is configured
    the call fails with MissingCredential before any client is built.
    """
    try:
        api_key = get_api_key()
        if not api_key:
            raise MissingCredentialError(missing_credential_message())
        if llm is None:
            llm = create_llm(api_key)

        messages = [{"role": "user", "content": build_prompt(code, error_context)}]
        response = invoke_with_retry(llm, messages)
        return {"ok": True, "text": response_text(response)}
    except Exception as exc:
        return _failure(exc)
