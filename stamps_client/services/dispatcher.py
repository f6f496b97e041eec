"""Request dispatch: one authenticated call per invocation.

The dispatcher builds the call specification from transport settings,
places the authentication field ahead of the payload, hands the message to
the transport and normalizes what comes back. It never retries; callers
that want resilience wrap ``dispatch``.

Example:
    dispatcher = RequestDispatcher(config.transport, SoapTransport(...), creds)
    result = dispatcher.dispatch("GetRates", GetRates(rate=rate).to_wire(), token)
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from stamps_client.config import TransportConfig
from stamps_client.mapping import WireStructure
from stamps_client.models import Credentials
from stamps_client.services.response import TransportResponse, normalize_response

logger = logging.getLogger(__name__)

AUTHENTICATOR_FIELD = "Authenticator"
CREDENTIALS_FIELD = "Credentials"


@dataclass(frozen=True)
class CallSpec:
    """Everything the transport needs to know about one call.

    Attributes:
        operation: Remote operation name, e.g. ``GetRates``.
        soap_action: ``{namespace}/{operation}`` action header value.
        tls_version: Pinned TLS version name.
        open_timeout: Connect timeout in seconds.
        read_timeout: Read timeout in seconds.
        log_messages: Whether request/response bodies are logged.
    """

    operation: str
    soap_action: str
    tls_version: str
    open_timeout: float
    read_timeout: float
    log_messages: bool = False


class Transport(Protocol):
    """Sends one message and returns the raw response."""

    def call(self, call: CallSpec, message: WireStructure) -> TransportResponse: ...


def soap_action(namespace: str | None, operation: str) -> str:
    """Join namespace and operation the way the service expects."""
    return "/".join(part for part in (namespace, operation) if part)


class RequestDispatcher:
    """Builds, authenticates and sends calls through a transport.

    Exactly one of two authentication modes is active per instance:
    token mode (``use_credentials=False``) sends the Authenticator token,
    raw-credential mode sends a Credentials structure on every payload.

    Attributes:
        _settings: Transport settings (endpoint, namespace, timeouts).
        _transport: Collaborator performing the network call.
        _credentials: Account credentials.
        _use_credentials: True for raw-credential mode.
    """

    def __init__(
        self,
        settings: TransportConfig,
        transport: Transport,
        credentials: Credentials,
        use_credentials: bool = False,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._credentials = credentials
        self._use_credentials = use_credentials

    @property
    def use_credentials(self) -> bool:
        """True when credentials are sent inline instead of a token."""
        return self._use_credentials

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    def build_call(self, operation: str) -> CallSpec:
        """Build the call specification for ``operation`` from settings."""
        return CallSpec(
            operation=operation,
            soap_action=soap_action(self._settings.namespace, operation),
            tls_version=self._settings.tls_version,
            open_timeout=self._settings.open_timeout,
            read_timeout=self._settings.read_timeout,
            log_messages=self._settings.log_messages,
        )

    def authenticate(self, payload: WireStructure, token: str | None = None) -> WireStructure:
        """Place the authentication field first on ``payload``.

        Args:
            payload: Resolved request payload.
            token: Authenticator token (token mode only).

        Returns:
            Payload with Credentials (raw-credential mode) or Authenticator
            (token mode with a token) as its first field. In token mode
            without a token the payload is returned unchanged, which is how
            AuthenticateUser itself is sent.
        """
        if self._use_credentials:
            stripped = payload.without(AUTHENTICATOR_FIELD, CREDENTIALS_FIELD)
            return stripped.prepend(CREDENTIALS_FIELD, self._credentials.to_wire())
        if token is not None:
            stripped = payload.without(AUTHENTICATOR_FIELD, CREDENTIALS_FIELD)
            return stripped.prepend(AUTHENTICATOR_FIELD, token)
        return payload

    def dispatch(
        self,
        operation: str,
        payload: WireStructure,
        token: str | None = None,
        wrapper: str | None = None,
    ) -> dict[str, Any]:
        """Send one call and return the normalized result.

        Args:
            operation: Remote operation name.
            payload: Resolved request payload.
            token: Authenticator token, when in token mode.
            wrapper: Optional element name the authenticated payload is
                nested under (``indiciumRequest`` for ReprintIndicium).

        Returns:
            Response body plus ``errors`` and ``valid?``.

        Raises:
            HTTPStatusError: For classified non-success statuses.
            TransportError: If the service could not be reached.
        """
        call = self.build_call(operation)
        message = self.authenticate(payload, token)
        if wrapper:
            message = WireStructure(((wrapper, message),))

        logger.debug("Dispatching %s (action=%s)", operation, call.soap_action)
        raw = self._transport.call(call, message)
        logger.debug("%s returned HTTP %s", operation, raw.status_code)
        return normalize_response(raw)
