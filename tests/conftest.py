"""Root-level pytest fixtures for all tests.

Provides:
- FakeTransport: records every call and replays queued responses
- Token-mode and raw-credential-mode configs and clients
"""

from typing import Any

import pytest

from stamps_client.client import StampsClient
from stamps_client.config import AccountConfig, StampsConfig, TransportConfig
from stamps_client.errors import ProtocolFault
from stamps_client.mapping import WireStructure
from stamps_client.services.dispatcher import CallSpec
from stamps_client.services.response import TransportResponse

TEST_NAMESPACE = "http://stamps.com/xml/namespace/test/swsim/SwsimV135"
TEST_ENDPOINT = "https://swsim.testing.stamps.com/swsim/swsimv135.asmx"


class FakeTransport:
    """Transport double that records calls and replays canned responses.

    Unqueued calls get an empty HTTP 200 response.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[CallSpec, WireStructure]] = []
        self._responses: list[TransportResponse] = []

    def queue(
        self,
        body: dict[str, Any] | None = None,
        status_code: int = 200,
        fault: str | None = None,
    ) -> None:
        self._responses.append(
            TransportResponse(
                status_code=status_code,
                body=body or {},
                fault=ProtocolFault(faultstring=fault, faultcode="soap:Server") if fault else None,
            )
        )

    def queue_token(self, token: str = "auth-token-1") -> None:
        self.queue({"authenticate_user_response": {"authenticator": token}})

    def call(self, call: CallSpec, message: WireStructure) -> TransportResponse:
        self.calls.append((call, message))
        if self._responses:
            return self._responses.pop(0)
        return TransportResponse(status_code=200, body={})

    @property
    def operations(self) -> list[str]:
        return [call.operation for call, _ in self.calls]

    def message(self, operation: str) -> WireStructure:
        """Return the message of the last call to ``operation``."""
        for call, message in reversed(self.calls):
            if call.operation == operation:
                return message
        raise AssertionError(f"No call to {operation}")


def _config(use_credentials: bool) -> StampsConfig:
    return StampsConfig(
        account=AccountConfig(
            integration_id="integration-1",
            username="shipper",
            password="s3cret",
            use_credentials=use_credentials,
        ),
        transport=TransportConfig(
            endpoint=TEST_ENDPOINT,
            namespace=TEST_NAMESPACE,
            open_timeout=5,
            read_timeout=10,
        ),
    )


@pytest.fixture
def token_config() -> StampsConfig:
    """Config in token (Authenticator) mode."""
    return _config(use_credentials=False)


@pytest.fixture
def credential_config() -> StampsConfig:
    """Config in raw-credential mode."""
    return _config(use_credentials=True)


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(token_config, fake_transport) -> StampsClient:
    """Token-mode client over the fake transport."""
    return StampsClient(token_config, transport=fake_transport)


@pytest.fixture
def credential_client(credential_config, fake_transport) -> StampsClient:
    """Raw-credential-mode client over the fake transport."""
    return StampsClient(credential_config, transport=fake_transport)
