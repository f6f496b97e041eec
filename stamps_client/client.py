"""Stamps.com SWS/IM client.

One method per remote operation. Each method validates its input into the
typed request record, resolves it into a wire structure, dispatches one
authenticated call and unwraps the operation's result.

When the service reports a SOAP fault, methods return the whole normalized
response instead of the unwrapped result, so callers can inspect
``errors`` and ``valid?``. HTTP status failures raise.

Example:
    client = StampsClient(load_config())
    rates = client.get_rates({
        "from_zip_code": "45440",
        "to_zip_code": "45458",
        "weight_oz": "8.0",
        "ship_date": "2011-06-01",
    })
"""

import logging
from collections.abc import Mapping
from typing import Any

from stamps_client.config import StampsConfig, load_config
from stamps_client.models import (
    Address,
    CancelRequest,
    CarrierPickup,
    CleanseAddress,
    GetAccountInfo,
    GetPostageStatus,
    GetPurchaseStatus,
    GetRates,
    IndiciumRequest,
    ManifestRequest,
    PurchasePostage,
    Rate,
    ReprintRequest,
    TrackShipment,
    WireModel,
)
from stamps_client.services.authenticator import AuthenticatorManager
from stamps_client.services.dispatcher import RequestDispatcher, Transport
from stamps_client.services.response import ERRORS_KEY
from stamps_client.services.soap_transport import SoapTransport

logger = logging.getLogger(__name__)

Params = Mapping[str, Any] | WireModel


def _dig(data: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _listify(value: Any) -> list[Any]:
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


class StampsClient:
    """Synchronous client for the Stamps.com postage web service.

    Attributes:
        _config: Client configuration.
        _dispatcher: Sends authenticated calls through the transport.
        _authenticator: Owns the Authenticator token.
    """

    def __init__(
        self,
        config: StampsConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Account and transport settings. Defaults to StampsConfig().
            transport: Collaborator performing the network call. Defaults to
                SoapTransport over the configured endpoint.
        """
        self._config = config or StampsConfig()
        self._dispatcher = RequestDispatcher(
            settings=self._config.transport,
            transport=transport or SoapTransport(self._config.transport),
            credentials=self._config.account.to_credentials(),
            use_credentials=self._config.account.use_credentials,
        )
        self._authenticator = AuthenticatorManager(self._dispatcher)

    @classmethod
    def from_config_file(
        cls,
        config_path: str | None = None,
        transport: Transport | None = None,
    ) -> "StampsClient":
        """Build a client from stamps.yaml (see config.load_config).

        Raises:
            FileNotFoundError: If no config file is found.
        """
        config = load_config(config_path)
        if config is None:
            raise FileNotFoundError("No stamps.yaml or ~/.stamps/config.yaml found")
        return cls(config, transport=transport)

    @property
    def config(self) -> StampsConfig:
        return self._config

    @property
    def authenticator_token(self) -> str | None:
        """Authenticator token, obtained on first access (None in credential mode)."""
        return self._authenticator.get_token()

    def get_token(self) -> str | None:
        return self._authenticator.get_token()

    def _call(
        self,
        operation: str,
        request: WireModel,
        wrapper: str | None = None,
    ) -> dict[str, Any]:
        token = self._authenticator.get_token()
        return self._dispatcher.dispatch(
            operation, request.to_wire(), token=token, wrapper=wrapper
        )

    @staticmethod
    def _result(response: dict[str, Any], *path: str) -> Any:
        if response.get(ERRORS_KEY):
            return response
        return _dig(response, *path)

    # ── Account ────────────────────────────────────────────────────────

    def get_account_info(self) -> Any:
        """Return account information, including the postage balance."""
        response = self._call("GetAccountInfo", GetAccountInfo())
        return self._result(response, "get_account_info_response")

    def purchase_postage(self, params: Params) -> Any:
        """Purchase postage for the account.

        Args:
            params: transaction_id, amount and control_total (the current
                control total from get_account_info).
        """
        request = PurchasePostage.coerce(params)
        response = self._call("PurchasePostage", request)
        return self._result(response, "purchase_postage_response")

    def get_purchase_status(self, transaction_id: str) -> Any:
        """Return the status of a pending postage purchase."""
        request = GetPurchaseStatus(transaction_id=transaction_id)
        response = self._call("GetPurchaseStatus", request)
        return self._result(response, "get_purchase_status_response")

    def get_postage_status(self, transaction_id: str) -> Any:
        request = GetPostageStatus(transaction_id=transaction_id)
        response = self._call("GetPostageStatus", request)
        return self._result(response, "get_postage_status_response")

    # ── Rates ──────────────────────────────────────────────────────────

    def get_rates(self, params: Params, carrier: str = "USPS") -> list[dict[str, Any]] | dict[str, Any]:
        """Produce a list of rates matching the criteria provided.

        Args:
            params: Rate criteria, e.g. from_zip_code, to_zip_code,
                weight_oz, ship_date.
            carrier: Carrier to rate against.

        Returns:
            List of rate entries: empty when the service reports none, one
            element when a single rate comes back un-collected. The whole
            normalized response when the call did not succeed.
        """
        request = GetRates(rate=Rate.coerce(params), carrier=carrier)
        response = self._call("GetRates", request)
        result = response.get("get_rates_response")
        if result is None:
            return response
        return _listify(_dig(result, "rates", "rate"))

    def get_rate(self, params: Params) -> dict[str, Any] | None:
        """Return the first matching rate, or the response on failure."""
        rates = self.get_rates(params)
        if isinstance(rates, list):
            return rates[0] if rates else None
        return rates

    # ── Indicia ────────────────────────────────────────────────────────

    def create(self, params: Params, return_address: Params | None = None) -> Any:
        """Create a postage label (indicium).

        The ship-to address should already be cleansed and the rate chosen
        from get_rates.

        Args:
            params: IndiciumRequest fields: from, to, rate, customs, image
                and notification options.
            return_address: Default from-address; fields set in the
                request's own from-address take precedence.
        """
        request = IndiciumRequest.coerce(params)
        if return_address is not None:
            request = request.with_return_address(Address.coerce(return_address))
        response = self._call("CreateIndicium", request)
        return self._result(response, "create_indicium_response")

    def reprint(self, params: Params) -> Any:
        """Return label data for a previously issued indicium.

        Labels may be reprinted up to 7 days after creation, optionally with
        another image type, rotation or sheet position. Exactly one of
        integrator_tx_id, stamps_tx_id or tracking_number identifies the
        original label.
        """
        request = ReprintRequest.coerce(params)
        response = self._call("ReprintIndicium", request, wrapper="indiciumRequest")
        return self._result(
            response, "reprint_indicium_response", "reprint_indicium_result"
        )

    def cancel(self, params: Params) -> Any:
        """Refund postage and void the shipping label."""
        request = CancelRequest.coerce(params)
        response = self._call("CancelIndicium", request)
        return self._result(response, "cancel_indicium_response")

    def track(self, stamps_transaction_id: str) -> Any:
        """Return tracking events for a label."""
        request = TrackShipment(stamps_transaction_id=stamps_transaction_id)
        response = self._call("TrackShipment", request)
        return self._result(response, "track_shipment_response")

    def create_manifest(self, params: Params) -> Any:
        """Generate an end-of-day manifest (SCAN form).

        A SCAN form accepts at most 1,000 labels and each label can be added
        to only one form. For non-PDF image types the URL string may hold
        several space-separated URLs.

        Returns:
            The manifest URL string when the service built one manifest, a
            list of URL strings in reply order when it built several, None
            when it built none, or the response on failure.
        """
        request = ManifestRequest.coerce(params)
        response = self._call("CreateManifest", request)
        if response.get(ERRORS_KEY):
            return response
        manifests = _dig(
            response,
            "create_manifest_response",
            "end_of_day_manifests",
            "end_of_day_manifest",
        )
        urls = [
            manifest.get("manifest_url")
            for manifest in _listify(manifests)
            if isinstance(manifest, dict)
        ]
        if not urls:
            return None
        return urls[0] if len(urls) == 1 else urls

    # ── Addresses and pickups ──────────────────────────────────────────

    def cleanse_address(self, address: Params) -> Any:
        """Standardize an address per USPS conventions."""
        request = CleanseAddress(address=Address.coerce(address))
        response = self._call("CleanseAddress", request)
        return self._result(response, "cleanse_address_response")

    def carrier_pickup(self, params: Params) -> Any:
        """Schedule a carrier pickup."""
        request = CarrierPickup.coerce(params)
        response = self._call("CarrierPickup", request)
        return self._result(response, "carrier_pickup_response")
