"""
Failure taxonomy for the Pixabay tools.

Configuration, method-not-found and validation faults are raised as
``PixabayToolError`` subclasses and rejected at the protocol level. Upstream
faults are raised as ``PixabayAPIError`` by the HTTP client and turned into an
error-flagged tool result by the tool service.
"""
import enum
import logging
import re
from typing import Optional

from mcp import types

logger = logging.getLogger(__name__)

REDACTED = "***"
MAX_UPSTREAM_MESSAGE_LENGTH = 200
_ERROR_TAG_RE = re.compile(r"\[ERROR\s+(\d+)\]")


class FaultKind(enum.Enum):
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    METHOD_NOT_FOUND = "method_not_found"
    UPSTREAM = "upstream"
    UNKNOWN = "unknown"


class PixabayToolError(Exception):
    """Base class for faults that reject a tool invocation outright."""
    code = types.INTERNAL_ERROR
    kind = FaultKind.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(PixabayToolError):
    code = types.INTERNAL_ERROR
    kind = FaultKind.CONFIGURATION


class MethodNotFoundError(PixabayToolError):
    code = types.METHOD_NOT_FOUND
    kind = FaultKind.METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidParamsError(PixabayToolError):
    code = types.INVALID_PARAMS
    kind = FaultKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class PixabayAPIError(Exception):
    """An HTTP, network or payload failure talking to Pixabay."""

    def __init__(self, message: str, status_code: Optional[int] = None, status_text: Optional[str] = None,
                 error_code: Optional[str] = None, upstream_message: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_text = status_text
        self.error_code = error_code
        self.upstream_message = upstream_message

    @classmethod
    def from_response(cls, response, api_key: Optional[str] = None) -> "PixabayAPIError":
        """Builds an error from a non-2xx ``requests.Response``."""
        upstream_message, error_code = _extract_upstream_details(response)
        status_text = getattr(response, "reason", None)
        message = f"HTTP {response.status_code} {status_text or ''}".strip()
        return cls(
            redact(message, api_key),
            status_code=response.status_code,
            status_text=status_text,
            error_code=redact(error_code, api_key) if error_code else None,
            upstream_message=redact(upstream_message, api_key) if upstream_message else None,
        )


def _extract_upstream_details(response):
    upstream_message = None
    error_code = None
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        upstream_message = body.get("message")
        code = body.get("code", body.get("error"))
        if code is not None:
            error_code = str(code)
    else:
        text = (getattr(response, "text", "") or "").strip()
        if text:
            upstream_message = text
            match = _ERROR_TAG_RE.search(text)
            if match:
                error_code = match.group(1)

    if upstream_message is not None:
        upstream_message = str(upstream_message)[:MAX_UPSTREAM_MESSAGE_LENGTH]
    return upstream_message, error_code


def redact(text: str, api_key: Optional[str]) -> str:
    """Replaces every occurrence of the API key in ``text``."""
    if not api_key or not text:
        return text
    return text.replace(api_key, REDACTED)


def classify_error(exc: BaseException) -> FaultKind:
    if isinstance(exc, PixabayToolError):
        return exc.kind
    if isinstance(exc, PixabayAPIError):
        return FaultKind.UPSTREAM
    return FaultKind.UNKNOWN


def describe_upstream_error(err: PixabayAPIError) -> str:
    """Caller-facing text for an upstream fault.

    Pixabay answers both an invalid key and a malformed request with HTTP 400,
    so a 400 always carries a hint to check the key.
    """
    if err.status_code is None:
        return f"Pixabay API error: {err.message}"
    message = f"Pixabay API error: {err.status_code} {err.upstream_message or err.message}"
    if err.status_code == 400:
        message += ". Please check if the API key is valid."
    return message


def log_upstream_error(err: PixabayAPIError, tool_name: str) -> None:
    logger.error(
        f"{tool_name} failed [{FaultKind.UPSTREAM.value}]: status={err.status_code} status_text={err.status_text} "
        f"code={err.error_code} message={err.upstream_message or err.message}"
    )
