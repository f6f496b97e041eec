"""Protocol layer: dispatch, authentication, transport and normalization."""

from stamps_client.services.authenticator import AuthenticatorManager
from stamps_client.services.dispatcher import CallSpec, RequestDispatcher, Transport
from stamps_client.services.response import Response, TransportResponse, normalize_response
from stamps_client.services.soap_transport import SoapTransport

__all__ = [
    "AuthenticatorManager",
    "CallSpec",
    "RequestDispatcher",
    "Response",
    "SoapTransport",
    "Transport",
    "TransportResponse",
    "normalize_response",
]
