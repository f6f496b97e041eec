"""Client library for the Stamps.com SWS/IM postage web service.

Example:
    from stamps_client import StampsClient, load_config

    client = StampsClient(load_config())
    label = client.create({...})
"""

from stamps_client.client import StampsClient
from stamps_client.config import StampsConfig, configure_logging, load_config
from stamps_client.errors import (
    AuthenticationError,
    BadRequest,
    Forbidden,
    HTTPStatusError,
    InternalServerError,
    NotAcceptable,
    NotFound,
    ServiceUnavailable,
    StampsError,
    TransportError,
    Unauthorized,
)

__version__ = "0.1.0"

__all__ = [
    "StampsClient",
    "StampsConfig",
    "configure_logging",
    "load_config",
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
]
