"""Error code registry with E-XXXX format codes.

Error categories:
- E-3xxx: Stamps.com service errors (HTTP status classes)
- E-4xxx: Transport/system errors
- E-5xxx: Authentication errors

Each error includes a code, title, message template, and remediation steps.
Retryability is informational only; this library never retries.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error codes."""

    SERVICE = "service"  # E-3xxx
    SYSTEM = "system"  # E-4xxx
    AUTH = "auth"  # E-5xxx


@dataclass
class ErrorCode:
    """Definition of an error code with metadata.

    Attributes:
        code: Error code in E-XXXX format.
        category: Error category for grouping.
        title: Short title for display.
        message_template: Message with {placeholders} for context.
        remediation: Action the caller should take to resolve.
        is_retryable: Whether a caller-side retry is reasonable.
    """

    code: str
    category: ErrorCategory
    title: str
    message_template: str
    remediation: str
    is_retryable: bool = False


ERROR_REGISTRY: dict[str, ErrorCode] = {
    # Service errors (E-3xxx)
    "E-3001": ErrorCode(
        code="E-3001",
        category=ErrorCategory.SERVICE,
        title="Bad Request",
        message_template="({status}): BadRequest",
        remediation="Check the request fields against the SWS/IM schema.",
    ),
    "E-3002": ErrorCode(
        code="E-3002",
        category=ErrorCategory.SERVICE,
        title="Unauthorized",
        message_template="({status}): Unauthorized",
        remediation="Verify the integration ID, username and password.",
    ),
    "E-3003": ErrorCode(
        code="E-3003",
        category=ErrorCategory.SERVICE,
        title="Forbidden",
        message_template="({status}): Forbidden",
        remediation="The account is not permitted to call this operation.",
    ),
    "E-3004": ErrorCode(
        code="E-3004",
        category=ErrorCategory.SERVICE,
        title="Not Found",
        message_template="({status}): NotFound",
        remediation="Check the configured endpoint URL.",
    ),
    "E-3005": ErrorCode(
        code="E-3005",
        category=ErrorCategory.SERVICE,
        title="Not Acceptable",
        message_template="({status}): NotAcceptable",
        remediation="Check the request content type and SOAP action.",
    ),
    "E-3006": ErrorCode(
        code="E-3006",
        category=ErrorCategory.SERVICE,
        title="Internal Server Error",
        message_template="{status}: Stamps.com had an internal error",
        remediation="Retry later; contact Stamps.com support if it persists.",
        is_retryable=True,
    ),
    "E-3007": ErrorCode(
        code="E-3007",
        category=ErrorCategory.SERVICE,
        title="Service Unavailable",
        message_template="({status}): ServiceUnavailable",
        remediation="Wait a few minutes and retry.",
        is_retryable=True,
    ),
    # System errors (E-4xxx)
    "E-4001": ErrorCode(
        code="E-4001",
        category=ErrorCategory.SYSTEM,
        title="Service Unreachable",
        message_template="Could not reach {endpoint}: {reason}",
        remediation="Check network connectivity, endpoint URL and timeouts.",
        is_retryable=True,
    ),
    # Authentication errors (E-5xxx)
    "E-5001": ErrorCode(
        code="E-5001",
        category=ErrorCategory.AUTH,
        title="Authentication Failed",
        message_template="{reason}",
        remediation="Verify the integration ID, username and password.",
    ),
}


def get_error(code: str) -> ErrorCode | None:
    """Look up error definition by code.

    Args:
        code: Error code in E-XXXX format.

    Returns:
        ErrorCode if found, None otherwise.
    """
    return ERROR_REGISTRY.get(code)


def get_errors_by_category(category: ErrorCategory) -> list[ErrorCode]:
    """Get all error codes in a category.

    Args:
        category: The error category to filter by.

    Returns:
        List of ErrorCode objects in the category.
    """
    return [e for e in ERROR_REGISTRY.values() if e.category == category]


def format_message(code: str, **context: object) -> str:
    """Render a registry message template with context values.

    Unknown codes render as ``Unknown error: <code>``; missing
    placeholders leave the template as-is.
    """
    error_def = get_error(code)
    if error_def is None:
        return f"Unknown error: {code}"
    try:
        return error_def.message_template.format(**context)
    except KeyError:
        return error_def.message_template
