"""Request records, one per remote operation.

Authentication fields (Authenticator / Credentials) are not declared here;
the dispatcher places them ahead of these fields on every call.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, ClassVar

from pydantic import Field, model_validator

from stamps_client.mapping import FieldDescriptor as F
from stamps_client.mapping import each_wrapped, iso_date, nested, wrap
from stamps_client.models.address import Address, Credentials
from stamps_client.models.base import Repeated, WireModel
from stamps_client.models.customs import Customs
from stamps_client.models.rate import Rate


class AuthenticateUser(WireModel):
    credentials: Credentials

    wire_fields: ClassVar = (F("Credentials", "credentials", nested),)


class GetAccountInfo(WireModel):
    """GetAccountInfo carries nothing besides authentication."""

    wire_fields: ClassVar = ()


class GetRates(WireModel):
    rate: Rate
    carrier: str | None = "USPS"

    wire_fields: ClassVar = (
        F("Rate", "rate", nested),
        F("Carrier", "carrier"),
    )


class IndiciumRequest(WireModel):
    """CreateIndicium request: addresses, chosen rate and print options.

    The lower-camel wire names (``memo``, ``deliveryNotification``, ...)
    are the service's own spelling and must not be capitalised.
    """

    transaction_id: str | None = None
    tracking_number: str | None = None
    rate: Rate | None = None
    from_address: Address | None = Field(default=None, alias="from")
    to_address: Address | None = Field(default=None, alias="to")
    customer_id: str | None = None
    customs: Customs | None = None
    sample: bool | None = None
    image_type: str | None = None
    label_resolution: str | None = None
    memo: str | None = None
    recipient_email: str | None = None
    notify: bool | None = None
    notify_crates: bool | None = None
    notify_from_company: bool | None = None
    notify_in_subject: bool | None = None
    rotation: int | None = None
    print_memo: bool | None = None
    non_delivery: str | None = None
    paper_size: str | None = None

    wire_fields: ClassVar = (
        F("IntegratorTxID", "transaction_id"),
        F("TrackingNumber", "tracking_number"),
        F("Rate", "rate", nested),
        F("From", "from_address", nested),
        F("To", "to_address", nested),
        F("CustomerID", "customer_id"),
        F("Customs", "customs", nested),
        F("SampleOnly", "sample"),
        F("ImageType", "image_type"),
        F("EltronPrinterDPIType", "label_resolution"),
        F("memo", "memo"),
        F("recipient_email", "recipient_email"),
        F("deliveryNotification", "notify"),
        F("shipmentNotificationCC", "notify_crates"),
        F("shipmentNotificationFromCompany", "notify_from_company"),
        F("shipmentNotificationCompanyInSubject", "notify_in_subject"),
        F("rotationDegrees", "rotation"),
        F("printMemo", "print_memo"),
        F("nonDeliveryOption", "non_delivery"),
        F("PaperSize", "paper_size"),
    )

    def with_return_address(self, return_address: Address | None) -> "IndiciumRequest":
        """Merge the caller's from-address over a default return address."""
        if return_address is None:
            return self
        from_address = (self.from_address or Address()).merged_over(return_address)
        return self.model_copy(update={"from_address": from_address})


class ReprintRequest(WireModel):
    """ReprintIndicium request.

    Exactly one of ``integrator_tx_id``, ``stamps_tx_id`` or
    ``tracking_number`` identifies the original label.
    """

    integrator_tx_id: str | None = None
    stamps_tx_id: str | None = None
    tracking_number: str | None = None
    image_type: str | None = None
    rotation_degrees: int | None = None
    paper_size: str | None = None
    start_row: int | None = None
    start_column: int | None = None

    wire_fields: ClassVar = (
        F("IntegratorTxID", "integrator_tx_id"),
        F("StampsTxId", "stamps_tx_id", wrap("guid")),
        F("TrackingNumber", "tracking_number"),
        F("ImageType", "image_type"),
        F("RotationDegrees", "rotation_degrees"),
        F("PaperSize", "paper_size"),
        F("StartRow", "start_row"),
        F("StartColumn", "start_column"),
    )

    @model_validator(mode="after")
    def exactly_one_identifier(self) -> "ReprintRequest":
        """Ensure exactly one label identifier is populated."""
        set_fields = sum(
            1 for v in (self.integrator_tx_id, self.stamps_tx_id, self.tracking_number)
            if v is not None
        )
        if set_fields != 1:
            raise ValueError(
                "Exactly one of integrator_tx_id, stamps_tx_id or "
                "tracking_number must be set"
            )
        return self


class CancelRequest(WireModel):
    transaction_id: str | None = None
    tracking_numbers: Annotated[tuple[str, ...] | None, Repeated] = None

    wire_fields: ClassVar = (
        F("StampsTxID", "transaction_id"),
        F("TrackingNumbers", "tracking_numbers", each_wrapped("string")),
    )


class TrackShipment(WireModel):
    stamps_transaction_id: str

    wire_fields: ClassVar = (F("StampsTxID", "stamps_transaction_id"),)


class ManifestRequest(WireModel):
    """CreateManifest request (end-of-day manifest / SCAN form).

    Labels are selected by StampsTxIDs or tracking numbers, or, when
    neither is given, by every open label of ``ship_date``.
    """

    integrator_tx_id: str | None = None
    stamps_tx_ids: Annotated[tuple[str, ...] | None, Repeated] = None
    tracking_numbers: Annotated[tuple[str, ...] | None, Repeated] = None
    ship_date: date | None = None
    from_address: Address | None = None
    image_type: str | None = None
    print_instructions: bool = False
    manifest_type: str = "ScanForm"

    wire_fields: ClassVar = (
        F("IntegratorTxID", "integrator_tx_id"),
        F("StampsTxIds", "stamps_tx_ids", each_wrapped("guid")),
        F("TrackingNumbers", "tracking_numbers", each_wrapped("string")),
        F("ShipDate", "ship_date", iso_date),
        F("FromAddress", "from_address", nested),
        F("ImageType", "image_type"),
        F("PrintInstructions", "print_instructions"),
        F("ManifestType", "manifest_type"),
    )


class CleanseAddress(WireModel):
    address: Address

    wire_fields: ClassVar = (F("Address", "address", nested),)


class PurchasePostage(WireModel):
    transaction_id: str | None = None
    amount: Decimal | None = None
    control_total: Decimal | None = None

    wire_fields: ClassVar = (
        F("IntegratorTxID", "transaction_id"),
        F("PurchaseAmount", "amount"),
        F("ControlTotal", "control_total"),
    )


class GetPurchaseStatus(WireModel):
    transaction_id: str

    wire_fields: ClassVar = (F("TransactionID", "transaction_id"),)


class CarrierPickup(WireModel):
    """CarrierPickup request; the pickup address is flat, not an Address."""

    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address: str | None = None
    suite: str = ""
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    zip_four: str | None = None
    phone: str | None = None
    phone_ext: str | None = None
    express_mail_count: int | None = None
    priority_mail_count: int | None = None
    international_mail_count: int | None = None
    other_mail_count: int | None = None
    total_weight: float | None = None
    location: str | None = None
    special_instruction: str | None = None

    wire_fields: ClassVar = (
        F("FirstName", "first_name"),
        F("LastName", "last_name"),
        F("Company", "company"),
        F("Address", "address"),
        F("SuiteOrApt", "suite"),
        F("City", "city"),
        F("State", "state"),
        F("ZIP", "zip"),
        F("ZIP4", "zip_four"),
        F("PhoneNumber", "phone"),
        F("PhoneExt", "phone_ext"),
        F("NumberOfExpressMailPieces", "express_mail_count"),
        F("NumberOfPriorityMailPieces", "priority_mail_count"),
        F("NumberOfInternationalPieces", "international_mail_count"),
        F("NumberOfOtherPieces", "other_mail_count"),
        F("TotalWeightOfPackagesLbs", "total_weight"),
        F("PackageLocation", "location"),
        F("SpecialInstruction", "special_instruction"),
    )


class GetPostageStatus(WireModel):
    transaction_id: str

    wire_fields: ClassVar = (F("TransactionID", "transaction_id"),)
