"""Response normalization and error classification.

Turns a raw TransportResponse into the uniform result callers receive: the
service's body plus ``errors`` (list of str) and ``valid?`` (bool).

A SOAP fault takes precedence over the HTTP status: the fault text is
recorded in ``errors`` and nothing is raised. Without a fault, classified
non-success statuses raise their HTTPStatusError subclass.

Example:
    result = Response(raw).to_dict()
    if not result["valid?"]:
        print(result["errors"][0])
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from stamps_client.errors import HTTPStatusError, ProtocolFault

logger = logging.getLogger(__name__)

ERRORS_KEY = "errors"
VALID_KEY = "valid?"
_FAULT_KEYS = ("fault", "soap:Fault")


@dataclass
class TransportResponse:
    """What the transport hands back for one call.

    Attributes:
        status_code: HTTP status code.
        body: Parsed SOAP Body content (snake_case keys).
        fault: Protocol fault, when the service reported one.
    """

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    fault: ProtocolFault | None = None


class ResponseState(str, Enum):
    UNCLASSIFIED = "unclassified"
    FAULT = "fault"
    CLASSIFIED = "classified"


class Response:
    """Normalized response for one call.

    Classification happens on construction; HTTP status errors are raised
    from ``__init__``.

    Attributes:
        errors: Fault messages, empty on success.
        valid: False once a fault was recorded.
        status_code: HTTP status, kept for classification only.
        state: Classification outcome.
    """

    def __init__(self, raw: TransportResponse) -> None:
        self.errors: list[str] = []
        self.valid = True
        self.status_code = raw.status_code
        self.state = ResponseState.UNCLASSIFIED
        self._body = dict(raw.body)
        self._fault = raw.fault
        self._classify()

    def _classify(self) -> None:
        if self._fault is not None:
            self._record_fault(self._fault)
            return

        error = HTTPStatusError.for_status(self.status_code, self._body)
        if error is not None:
            logger.warning("Stamps.com returned HTTP %s", self.status_code)
            raise error

        if self.status_code != 200:
            logger.warning(
                "Unclassified HTTP status %s passed through as success",
                self.status_code,
            )
        self.state = ResponseState.CLASSIFIED

    def _record_fault(self, fault: ProtocolFault) -> None:
        for key in _FAULT_KEYS:
            self._body.pop(key, None)
        self.errors.append(fault.faultstring)
        self.valid = False
        self.state = ResponseState.FAULT
        logger.info("Stamps.com fault (%s): %s", fault.faultcode, fault.faultstring)

    @property
    def body(self) -> dict[str, Any]:
        """Body without reserved fields."""
        return self._body

    def is_valid(self) -> bool:
        return self.valid

    def to_dict(self) -> dict[str, Any]:
        """Return the body augmented with ``errors`` and ``valid?``."""
        result = dict(self._body)
        result[ERRORS_KEY] = list(self.errors)
        result[VALID_KEY] = self.valid
        return result


def normalize_response(raw: TransportResponse) -> dict[str, Any]:
    """Classify ``raw`` and return the uniform result dict.

    Raises:
        HTTPStatusError: For classified non-success statuses without a fault.
    """
    return Response(raw).to_dict()
