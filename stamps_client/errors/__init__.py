"""Error handling for the Stamps.com client.

This package provides:
- Error code registry with E-XXXX format codes
- Typed exceptions for authentication, transport and HTTP status failures
- The ProtocolFault value carried from transport to response normalizer

Error categories:
- E-3xxx: Stamps.com service errors
- E-4xxx: Transport/system errors
- E-5xxx: Authentication errors
"""

from stamps_client.errors.exceptions import (
    AuthenticationError,
    BadRequest,
    Forbidden,
    HTTPStatusError,
    InternalServerError,
    NotAcceptable,
    NotFound,
    ProtocolFault,
    ServiceUnavailable,
    StampsError,
    TransportError,
    Unauthorized,
)
from stamps_client.errors.registry import (
    ERROR_REGISTRY,
    ErrorCategory,
    ErrorCode,
    get_error,
    get_errors_by_category,
)

__all__ = [
    # Registry
    "ErrorCode",
    "ErrorCategory",
    "ERROR_REGISTRY",
    "get_error",
    "get_errors_by_category",
    # Exceptions
    "StampsError",
    "AuthenticationError",
    "TransportError",
    "HTTPStatusError",
    "BadRequest",
    "Unauthorized",
    "Forbidden",
    "NotFound",
    "NotAcceptable",
    "InternalServerError",
    "ServiceUnavailable",
    "ProtocolFault",
]
