"""Typed exceptions raised by the client, plus the protocol-fault value.

Usage:
    try:
        rates = client.get_rates({...})
    except ServiceUnavailable as e:
        log.warning("Stamps.com down: %s", e.body)
    except HTTPStatusError as e:
        raise

Protocol (SOAP) faults are not raised; they are folded into the normalized
response's ``errors`` list. ProtocolFault is the value the transport hands
over when it sees one.
"""

from dataclasses import dataclass
from typing import Any, ClassVar

from stamps_client.errors.registry import format_message, get_error


class StampsError(Exception):
    """Base exception for all client errors.

    Attributes:
        code: Error code in E-XXXX format.
        message: Human-readable error message.
        details: Additional context.
    """

    def __init__(self, code: str, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"[{self.code}] {self.message}"

    @property
    def remediation(self) -> str:
        """Suggested fix from the error registry."""
        error_def = get_error(self.code)
        return error_def.remediation if error_def else ""

    @property
    def is_retryable(self) -> bool:
        """Whether a caller-side retry is reasonable."""
        error_def = get_error(self.code)
        return bool(error_def and error_def.is_retryable)


class AuthenticationError(StampsError):
    """Authenticator token exchange failed. Fatal to the enclosing call."""

    def __init__(self, reason: str | None = None) -> None:
        reason = reason or "AuthenticateUser returned no authenticator"
        super().__init__("E-5001", format_message("E-5001", reason=reason))
        self.reason = reason


class TransportError(StampsError):
    """The service could not be reached (connect/read failure or timeout)."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(
            "E-4001",
            format_message("E-4001", endpoint=endpoint, reason=reason),
            details={"endpoint": endpoint},
        )
        self.endpoint = endpoint
        self.reason = reason


class HTTPStatusError(StampsError):
    """Non-success HTTP status without a protocol fault.

    Attributes:
        status_code: HTTP status of the response.
        body: Parsed response body, for caller inspection.
    """

    error_code: ClassVar[str] = ""
    default_status: ClassVar[int] = 0

    def __init__(self, body: Any, status_code: int | None = None) -> None:
        status = status_code or self.default_status
        super().__init__(
            self.error_code,
            format_message(self.error_code, status=status),
            details={"status_code": status},
        )
        self.status_code = status
        self.body = body

    @classmethod
    def for_status(cls, status_code: int, body: Any) -> "HTTPStatusError | None":
        """Build the error for a classified status, or None if unclassified.

        Args:
            status_code: HTTP status of the response.
            body: Parsed response body.

        Returns:
            Matching HTTPStatusError subclass instance, or None.
        """
        error_cls = _STATUS_ERRORS.get(status_code)
        if error_cls is None:
            return None
        return error_cls(body, status_code)


class BadRequest(HTTPStatusError):
    """HTTP 400."""

    error_code = "E-3001"
    default_status = 400


class Unauthorized(HTTPStatusError):
    """HTTP 401."""

    error_code = "E-3002"
    default_status = 401


class Forbidden(HTTPStatusError):
    """HTTP 403."""

    error_code = "E-3003"
    default_status = 403


class NotFound(HTTPStatusError):
    """HTTP 404."""

    error_code = "E-3004"
    default_status = 404


class NotAcceptable(HTTPStatusError):
    """HTTP 406."""

    error_code = "E-3005"
    default_status = 406


class InternalServerError(HTTPStatusError):
    """HTTP 500 without a SOAP fault."""

    error_code = "E-3006"
    default_status = 500


class ServiceUnavailable(HTTPStatusError):
    """HTTP 502 or 503."""

    error_code = "E-3007"
    default_status = 503


_STATUS_ERRORS: dict[int, type[HTTPStatusError]] = {
    400: BadRequest,
    401: Unauthorized,
    403: Forbidden,
    404: NotFound,
    406: NotAcceptable,
    500: InternalServerError,
    502: ServiceUnavailable,
    503: ServiceUnavailable,
}


@dataclass(frozen=True)
class ProtocolFault:
    """SOAP fault reported by the service independently of HTTP status.

    Attributes:
        faultstring: Human-readable fault text.
        faultcode: Fault code, e.g. ``soap:Server``.
    """

    faultstring: str
    faultcode: str | None = None

    @classmethod
    def from_body(cls, fault: Any) -> "ProtocolFault":
        """Build from a parsed ``Fault`` element (dict or bare text)."""
        if isinstance(fault, dict):
            return cls(
                faultstring=str(fault.get("faultstring") or ""),
                faultcode=fault.get("faultcode"),
            )
        return cls(faultstring=str(fault or ""))
