"""Authenticator token lifecycle.

By using an Authenticator the integration keeps its conversation with the
service in sync. The token is obtained lazily by one AuthenticateUser call
and reused for the lifetime of the client. In raw-credential mode no token
exists and no call is ever made.
"""

import logging
import threading
from typing import Any

from stamps_client.errors import AuthenticationError
from stamps_client.models import AuthenticateUser
from stamps_client.services.dispatcher import RequestDispatcher
from stamps_client.services.response import ERRORS_KEY

logger = logging.getLogger(__name__)

AUTHENTICATE_OPERATION = "AuthenticateUser"


class AuthenticatorManager:
    """Lazily obtains and memoizes the Authenticator token.

    The cache fill is guarded so concurrent first callers on one client
    issue a single AuthenticateUser call between them.

    Attributes:
        _dispatcher: Dispatcher used for the AuthenticateUser call.
        _token: Cached token, None until obtained.
        _lock: Guards the cache fill.
    """

    def __init__(self, dispatcher: RequestDispatcher) -> None:
        self._dispatcher = dispatcher
        self._token: str | None = None
        self._lock = threading.Lock()

    @property
    def token(self) -> str | None:
        """Cached token without triggering authentication."""
        return self._token

    def get_token(self) -> str | None:
        """Return the Authenticator token, authenticating on first use.

        Returns:
            Token string, or None in raw-credential mode.

        Raises:
            AuthenticationError: If AuthenticateUser returned no token.
        """
        if self._dispatcher.use_credentials:
            return None
        if self._token is not None:
            return self._token
        with self._lock:
            if self._token is None:
                self._token = self._authenticate()
        return self._token

    def reset(self) -> None:
        """Forget the cached token; the next call authenticates again."""
        with self._lock:
            self._token = None

    def _authenticate(self) -> str:
        request = AuthenticateUser(credentials=self._dispatcher.credentials)
        response = self._dispatcher.dispatch(AUTHENTICATE_OPERATION, request.to_wire())
        token = _extract_token(response)
        if token is None:
            errors = response.get(ERRORS_KEY) or []
            raise AuthenticationError(errors[0] if errors else None)
        logger.info("Obtained Stamps.com authenticator")
        return token


def _extract_token(response: dict[str, Any]) -> str | None:
    result = response.get("authenticate_user_response")
    if not isinstance(result, dict):
        return None
    return result.get("authenticator")
