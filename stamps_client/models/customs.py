"""Customs declaration records for international labels."""

from decimal import Decimal
from typing import Annotated, ClassVar

from stamps_client.mapping import FieldDescriptor as F
from stamps_client.mapping import collection
from stamps_client.models.base import Repeated, WireModel


class CustomsLine(WireModel):
    """One declared item of a customs form."""

    description: str | None = None
    quantity: int | None = None
    value: Decimal | None = None
    weight_lb: float | None = None
    weight_oz: float | None = None
    hs_tariff_number: str | None = None
    country_of_origin: str | None = None

    wire_fields: ClassVar = (
        F("Description", "description"),
        F("Quantity", "quantity"),
        F("Value", "value"),
        F("WeightLb", "weight_lb"),
        F("WeightOz", "weight_oz"),
        F("HSTariffNumber", "hs_tariff_number"),
        F("CountryOfOrigin", "country_of_origin"),
    )


class Customs(WireModel):
    """Customs form; line order is significant and kept as given."""

    content_type: str | None = None
    comments: str | None = None
    license_number: str | None = None
    certificate_number: str | None = None
    invoice_number: str | None = None
    other_describe: str | None = None
    customs_lines: Annotated[tuple[CustomsLine, ...] | None, Repeated] = None
    senders_customs_reference: str | None = None

    wire_fields: ClassVar = (
        F("ContentType", "content_type"),
        F("Comments", "comments"),
        F("LicenseNumber", "license_number"),
        F("CertificateNumber", "certificate_number"),
        F("InvoiceNumber", "invoice_number"),
        F("OtherDescribe", "other_describe"),
        F("CustomsLines", "customs_lines", collection("CustomsLine")),
        F("SendersCustomsReference", "senders_customs_reference"),
    )
