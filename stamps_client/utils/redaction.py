"""Secret redaction for logged SOAP messages.

Outbound payloads are redacted as dicts before serialization; inbound
bodies are logged as raw XML, so element text is redacted by tag name.
Matching is case-insensitive. Handles nested dicts, lists of dicts and
known container keys.
"""

import re

# Substring patterns matched case-insensitively against dict keys
_DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "password", "authenticator", "token", "secret", "integrationid",
})

# Keys whose entire value is redacted (regardless of content type)
_CONTAINER_KEYS = frozenset({"credentials"})

_REDACTED = "***REDACTED***"


def _is_sensitive_key(key: str, sensitive_patterns: frozenset[str]) -> bool:
    key_lower = key.lower().split(":")[-1]
    return any(pattern in key_lower for pattern in sensitive_patterns)


def redact_for_logging(
    obj: dict,
    sensitive_patterns: frozenset[str] = _DEFAULT_SENSITIVE_PATTERNS,
) -> dict:
    """Redact sensitive values from a dict for safe logging.

    Args:
        obj: Dict to redact (not mutated; a copy is returned). Keys may
            carry a namespace prefix such as ``tns:Password``.
        sensitive_patterns: Substring patterns whose matching keys' values
            should be replaced.

    Returns:
        New dict with sensitive values replaced by '***REDACTED***'.
    """
    result = {}
    for key, value in obj.items():
        if key.lower().split(":")[-1] in _CONTAINER_KEYS:
            result[key] = _REDACTED
        elif _is_sensitive_key(key, sensitive_patterns):
            result[key] = _REDACTED
        elif isinstance(value, dict):
            result[key] = redact_for_logging(value, sensitive_patterns)
        elif isinstance(value, list):
            result[key] = [
                redact_for_logging(item, sensitive_patterns) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value
    return result


_SENSITIVE_ELEMENT = re.compile(
    r"(?is)<((?:[\w.-]+:)?(?:Authenticator|Password|IntegrationID))(\s[^>]*)?>"
    r".*?</\1>"
)


def redact_xml(text: str, max_length: int = 4000) -> str:
    """Blank out secret-bearing elements in an XML document for logging.

    Args:
        text: Raw XML.
        max_length: Longest string returned; longer output is truncated.

    Returns:
        XML with Authenticator, Password and IntegrationID contents
        replaced, truncated to ``max_length``.
    """
    sanitized = _SENSITIVE_ELEMENT.sub(
        lambda m: f"<{m.group(1)}>{_REDACTED}</{m.group(1)}>", text
    )
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length - 3] + "..."
    return sanitized
