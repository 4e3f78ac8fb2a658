"""
Error taxonomy for upstream-facing operations.

Every failure a route can report is an UpstreamError subclass carrying the
HTTP status to answer with. The app renders them as {"error": ..., "details": ...}.
"""
import httpx
from fastapi import Request
from fastapi.responses import JSONResponse


class UpstreamError(Exception):
    """Base error, rendered as a JSON error payload."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None, details: str | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class MissingParameterError(UpstreamError):
    """Required request parameter is missing or blank."""
    status_code = 400


class ConfigurationError(UpstreamError):
    """Server-held credential or setting is not configured."""
    status_code = 500


class UpstreamAuthError(UpstreamError):
    """Upstream rejected our credential."""
    status_code = 401


class UpstreamQuotaError(UpstreamError):
    """Upstream quota or rate limit hit. Retry is left to the user."""
    status_code = 429


class UpstreamValidationError(UpstreamError):
    """Upstream did not understand the entity we sent."""
    status_code = 422


class UpstreamFailure(UpstreamError):
    """Transport failure or unexpected exception."""
    status_code = 500


class ImageUnavailableError(UpstreamError):
    """Image could not be fetched; clients render a placeholder."""
    status_code = 404


def _error_class_for(status: int) -> type[UpstreamError]:
    if status in (401, 403):
        return UpstreamAuthError
    # The recipe service signals an exhausted daily quota with 402
    if status in (402, 429):
        return UpstreamQuotaError
    if status == 422:
        return UpstreamValidationError
    return UpstreamError


def _best_effort_message(response: httpx.Response) -> str:
    fallback = f"API error: {response.status_code} {response.reason_phrase}"
    try:
        body = response.json()
    except ValueError:
        return response.text or fallback
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or fallback
    return fallback


def error_from_response(
    response: httpx.Response,
    messages: dict[int, str] | None = None,
    default: str | None = None,
) -> UpstreamError:
    """
    Build the error matching a non-success upstream response.

    The upstream status is kept; the message comes from `messages` when the
    caller has a specific one for that status, else `default`, else from the
    response body.

    Args:
        response: Non-success upstream response
        messages: Optional status -> message overrides
        default: Optional message for statuses without an override

    Returns:
        UpstreamError subclass instance (not raised)
    """
    status = response.status_code
    message = (messages or {}).get(status) or default or _best_effort_message(response)
    error_class = _error_class_for(status)
    return error_class(message, status_code=status, details=response.text or None)


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Render an UpstreamError as a JSON error payload."""
    content = {"error": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)
