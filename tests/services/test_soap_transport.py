"""Tests for SoapTransport using httpx.MockTransport."""

import dataclasses
import logging
import ssl

import httpx
import pytest

from stamps_client.errors import TransportError
from stamps_client.mapping import WireStructure
from stamps_client.services.dispatcher import CallSpec
from stamps_client.services.soap_transport import (
    SoapTransport,
    parse_envelope,
    snake_case,
    ssl_context,
)

RATES_REPLY = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <GetRatesResponse xmlns="http://stamps.com/xml/namespace/test/swsim/SwsimV135">
      <Authenticator>next-token</Authenticator>
      <Rates>
        <Rate>
          <FromZIPCode>45440</FromZIPCode>
          <Amount>7.15</Amount>
          <CubicPricing>false</CubicPricing>
        </Rate>
      </Rates>
    </GetRatesResponse>
  </soap:Body>
</soap:Envelope>"""

FAULT_REPLY = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <soap:Fault>
      <faultcode>soap:Server</faultcode>
      <faultstring>Invalid SOAP message due to XML Schema validation failure.</faultstring>
    </soap:Fault>
  </soap:Body>
</soap:Envelope>"""

SINGLE_ADD_ON_REPLY = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <GetRatesResponse>
      <Rates>
        <Rate>
          <ServiceType>US-PM</ServiceType>
          <AddOns>
            <AddOnV17>
              <Amount>0</Amount>
              <AddOnType>US-A-DC</AddOnType>
            </AddOnV17>
          </AddOns>
        </Rate>
      </Rates>
    </GetRatesResponse>
  </soap:Body>
</soap:Envelope>"""

MANIFEST_REPLY = """<?xml version="1.0" encoding="utf-8"?>
<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">
  <soap:Body>
    <CreateManifestResponse>
      <EndOfDayManifests>
        <EndOfDayManifest>
          <ManifestUrl>https://scan/form.pdf</ManifestUrl>
        </EndOfDayManifest>
      </EndOfDayManifests>
    </CreateManifestResponse>
  </soap:Body>
</soap:Envelope>"""

CALL = CallSpec(
    operation="GetRates",
    soap_action="http://stamps.com/xml/namespace/test/swsim/SwsimV135/GetRates",
    tls_version="TLSv1_2",
    open_timeout=5,
    read_timeout=10,
)

MESSAGE = WireStructure([
    ("Authenticator", "tok"),
    ("Rate", WireStructure([("FromZIPCode", "45440"), ("ToZIPCode", "45458")])),
    ("Carrier", "USPS"),
])


def _transport(token_config, handler):
    return SoapTransport(token_config.transport, http_transport=httpx.MockTransport(handler))


class TestSnakeCase:
    @pytest.mark.parametrize("name,expected", [
        ("GetRatesResponse", "get_rates_response"),
        ("FromZIPCode", "from_zip_code"),
        ("soap:Fault", "fault"),
        ("URL", "url"),
        ("ManifestUrl", "manifest_url"),
        ("IntegratorTxID", "integrator_tx_id"),
    ])
    def test_conversion(self, name, expected):
        assert snake_case(name) == expected


class TestSslContext:
    def test_pinned_to_tls_1_2(self):
        context = ssl_context("TLSv1_2")
        assert context.minimum_version == ssl.TLSVersion.TLSv1_2
        assert context.maximum_version == ssl.TLSVersion.TLSv1_2

    def test_unsupported_version(self):
        with pytest.raises(ValueError, match="Unsupported TLS version"):
            ssl_context("SSLv3")


class TestBuildEnvelope:
    """Outbound envelope serialization."""

    def test_elements_qualified_in_order(self, token_config):
        envelope = SoapTransport(token_config.transport).build_envelope("GetRates", MESSAGE)
        assert 'xmlns:tns="http://stamps.com/xml/namespace/test/swsim/SwsimV135"' in envelope
        assert "<soap:Body><tns:GetRates><tns:Authenticator>tok</tns:Authenticator>" in envelope
        assert envelope.index("<tns:FromZIPCode>") < envelope.index("<tns:ToZIPCode>")
        assert envelope.index("</tns:Rate>") < envelope.index("<tns:Carrier>USPS</tns:Carrier>")

    def test_repeated_elements(self, token_config):
        message = WireStructure([("TrackingNumbers", ({"string": "1"}, {"string": "2"}))])
        envelope = SoapTransport(token_config.transport).build_envelope("CancelIndicium", message)
        assert (
            "<tns:TrackingNumbers><tns:string>1</tns:string></tns:TrackingNumbers>"
            "<tns:TrackingNumbers><tns:string>2</tns:string></tns:TrackingNumbers>"
        ) in envelope

    def test_booleans_rendered_lowercase(self, token_config):
        message = WireStructure([("PrintInstructions", False), ("SampleOnly", True)])
        envelope = SoapTransport(token_config.transport).build_envelope("CreateManifest", message)
        assert "<tns:PrintInstructions>false</tns:PrintInstructions>" in envelope
        assert "<tns:SampleOnly>true</tns:SampleOnly>" in envelope


class TestParseEnvelope:
    def test_body_is_snake_cased(self):
        body, fault = parse_envelope(RATES_REPLY)
        assert fault is None
        rate = body["get_rates_response"]["rates"]["rate"]
        assert rate == {"from_zip_code": "45440", "amount": "7.15", "cubic_pricing": False}

    def test_fault_extracted(self):
        body, fault = parse_envelope(FAULT_REPLY)
        assert fault.faultcode == "soap:Server"
        assert fault.faultstring.startswith("Invalid SOAP message")
        assert "fault" in body

    def test_single_collection_members_are_lists(self):
        body, _ = parse_envelope(SINGLE_ADD_ON_REPLY)
        rate = body["get_rates_response"]["rates"]["rate"]
        assert rate["add_ons"] == {
            "add_on_v17": [{"amount": "0", "add_on_type": "US-A-DC"}],
        }

    def test_single_manifest_is_a_list(self):
        body, _ = parse_envelope(MANIFEST_REPLY)
        manifests = body["create_manifest_response"]["end_of_day_manifests"]
        assert manifests == {"end_of_day_manifest": [{"manifest_url": "https://scan/form.pdf"}]}

    def test_non_xml(self):
        body, fault = parse_envelope("<html><body>Service Unavailable")
        assert body == {"content": "<html><body>Service Unavailable"}
        assert fault is None


class TestCall:
    """One POST per call over the mock transport."""

    def test_posts_envelope_with_soap_action(self, token_config):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, text=RATES_REPLY)

        raw = _transport(token_config, handler).call(CALL, MESSAGE)

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == token_config.transport.endpoint
        assert request.headers["SOAPAction"] == CALL.soap_action
        assert request.headers["Content-Type"] == "text/xml; charset=utf-8"
        assert b"<tns:GetRates>" in request.content
        assert raw.status_code == 200
        assert raw.fault is None
        assert "get_rates_response" in raw.body

    def test_fault_with_500(self, token_config):
        raw = _transport(token_config, lambda request: httpx.Response(500, text=FAULT_REPLY)).call(CALL, MESSAGE)
        assert raw.status_code == 500
        assert raw.fault is not None

    def test_connect_error_becomes_transport_error(self, token_config):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            _transport(token_config, handler).call(CALL, MESSAGE)
        assert exc_info.value.code == "E-4001"
        assert exc_info.value.endpoint == token_config.transport.endpoint
        assert "connection refused" in str(exc_info.value)

    def test_message_logging_redacts_secrets(self, token_config, caplog):
        call = dataclasses.replace(CALL, log_messages=True)
        transport = _transport(token_config, lambda request: httpx.Response(200, text=RATES_REPLY))
        with caplog.at_level(logging.INFO, logger="stamps_client.services.soap_transport"):
            transport.call(call, MESSAGE)
        assert "SOAP request GetRates" in caplog.text
        assert "SOAP response GetRates (HTTP 200)" in caplog.text
        assert "'tok'" not in caplog.text
        assert "next-token" not in caplog.text
