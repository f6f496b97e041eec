"""SOAP 1.1 transport over httpx.

Serializes a resolved WireStructure into a SOAP envelope with xmltodict,
POSTs it with the SOAPAction header over a TLS 1.2-pinned connection and
parses the reply back into a snake_case dict (``GetRatesResponse`` becomes
``get_rates_response``). A ``Fault`` in the reply is surfaced as a
ProtocolFault; the HTTP status is returned untouched for the normalizer.

Example:
    transport = SoapTransport(config.transport)
    raw = transport.call(call_spec, message)
"""

import logging
import re
import ssl
from typing import Any
from xml.parsers.expat import ExpatError

import httpx
import xmltodict

from stamps_client.config import TransportConfig
from stamps_client.errors import ProtocolFault, TransportError
from stamps_client.mapping import WireStructure
from stamps_client.services.dispatcher import CallSpec
from stamps_client.services.response import TransportResponse
from stamps_client.utils.redaction import redact_for_logging, redact_xml

logger = logging.getLogger(__name__)

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENV_PREFIX = "soap"

_TLS_VERSIONS = {
    "TLSv1_2": ssl.TLSVersion.TLSv1_2,
}

# Elements that only ever occur as members of a collection, by parsed key
_REPEATED_ELEMENTS = (
    "add_on_v9",
    "add_on_v17",
    "customs_line",
    "end_of_day_manifest",
    "tracking_event",
)

_FIRST_CAP = re.compile(r"([A-Z]+)([A-Z][a-z])")
_ALL_CAP = re.compile(r"([a-z\d])([A-Z])")


def snake_case(name: str) -> str:
    """Convert an XML element name to snake_case, dropping any prefix.

    Examples:
        >>> snake_case("soap:Fault")
        'fault'
        >>> snake_case("FromZIPCode")
        'from_zip_code'
    """
    local = name.split(":")[-1]
    local = _FIRST_CAP.sub(r"\1_\2", local)
    local = _ALL_CAP.sub(r"\1_\2", local)
    return local.replace("-", "_").lower()


def _postprocess(path: Any, key: str, value: Any) -> tuple[str, Any]:
    if value == "true":
        value = True
    elif value == "false":
        value = False
    return snake_case(key), value


def _qualify(value: Any, prefix: str) -> Any:
    if isinstance(value, dict):
        return {f"{prefix}:{k}": _qualify(v, prefix) for k, v in value.items()}
    if isinstance(value, list):
        return [_qualify(item, prefix) for item in value]
    return value


def ssl_context(tls_version: str) -> ssl.SSLContext:
    """Build a verifying SSL context pinned to one TLS version.

    Raises:
        ValueError: For an unsupported TLS version name.
    """
    try:
        version = _TLS_VERSIONS[tls_version]
    except KeyError:
        raise ValueError(f"Unsupported TLS version: {tls_version}") from None
    context = ssl.create_default_context()
    context.minimum_version = version
    context.maximum_version = version
    return context


def parse_envelope(text: str) -> tuple[dict[str, Any], ProtocolFault | None]:
    """Parse a SOAP reply into its Body content and an optional fault.

    Args:
        text: Raw response text.

    Returns:
        (body, fault). A reply that is not XML comes back as
        ``{"content": text}`` with no fault. Members of the collections in
        _REPEATED_ELEMENTS are always lists, even when there is only one.
    """
    try:
        document = xmltodict.parse(
            text,
            xml_attribs=False,
            postprocessor=_postprocess,
            force_list=_REPEATED_ELEMENTS,
        )
    except ExpatError:
        logger.debug("Response is not XML (%d chars)", len(text))
        return {"content": text}, None

    envelope = document.get("envelope") if isinstance(document, dict) else None
    body = envelope.get("body") if isinstance(envelope, dict) else None
    if not isinstance(body, dict):
        return {}, None

    fault = body.get("fault")
    if fault is None:
        return dict(body), None
    return dict(body), ProtocolFault.from_body(fault)


class SoapTransport:
    """Default transport: one synchronous HTTPS POST per call.

    Attributes:
        _settings: Endpoint, namespace and namespace identifier.
        _http_transport: Optional httpx transport (tests use MockTransport).
    """

    def __init__(
        self,
        settings: TransportConfig,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._http_transport = http_transport

    def build_envelope(self, operation: str, message: WireStructure) -> str:
        """Serialize ``message`` as the body of a SOAP envelope.

        Every body element is qualified with the namespace identifier.
        Element order follows the wire structure exactly.
        """
        ns_id = self._settings.namespace_identifier
        document = {
            f"{SOAP_ENV_PREFIX}:Envelope": {
                f"@xmlns:{SOAP_ENV_PREFIX}": SOAP_ENV_NS,
                f"@xmlns:{ns_id}": self._settings.namespace,
                f"{SOAP_ENV_PREFIX}:Body": {
                    f"{ns_id}:{operation}": _qualify(message.to_dict(), ns_id),
                },
            },
        }
        return xmltodict.unparse(document)

    def call(self, call: CallSpec, message: WireStructure) -> TransportResponse:
        """POST one SOAP call and parse the reply.

        Raises:
            TransportError: On connection failure or timeout.
        """
        envelope = self.build_envelope(call.operation, message)
        headers = {
            "SOAPAction": call.soap_action,
            "Content-Type": "text/xml; charset=utf-8",
        }
        if call.log_messages:
            logger.info(
                "SOAP request %s: %s",
                call.operation,
                redact_for_logging(message.to_dict()),
            )

        timeout = httpx.Timeout(call.read_timeout, connect=call.open_timeout)
        try:
            with httpx.Client(
                verify=ssl_context(call.tls_version),
                timeout=timeout,
                transport=self._http_transport,
            ) as client:
                response = client.post(
                    self._settings.endpoint,
                    content=envelope.encode("utf-8"),
                    headers=headers,
                )
        except httpx.TransportError as e:
            raise TransportError(self._settings.endpoint, str(e) or type(e).__name__) from e

        if call.log_messages:
            logger.info(
                "SOAP response %s (HTTP %s): %s",
                call.operation,
                response.status_code,
                redact_xml(response.text),
            )

        body, fault = parse_envelope(response.text)
        return TransportResponse(status_code=response.status_code, body=body, fault=fault)
