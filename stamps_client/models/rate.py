"""Rate and add-on records."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import Field

from stamps_client.mapping import FieldDescriptor as F
from stamps_client.mapping import carry, each, iso_date, nested
from stamps_client.models.address import Address
from stamps_client.models.base import Repeated, WireModel


class AddOnV9(WireModel):
    """Add-on in the V9 schema.

    ``requires_all_of`` and ``prohibited_with_any_of`` are the service's own
    relation lists; they are sent back exactly as received.
    """

    amount: Decimal | None = None
    add_on_type: str | None = None
    prohibited_with_any_of: Any = None
    missing_data: Any = None
    requires_all_of: Any = None

    wire_fields: ClassVar = (
        F("Amount", "amount"),
        F("AddOnType", "add_on_type"),
        F("ProhibitedWithAnyOf", "prohibited_with_any_of", carry),
        F("MissingData", "missing_data", carry),
        F("RequiresAllOf", "requires_all_of", carry),
    )


class AddOnV17(AddOnV9):
    """Add-on in the V17 schema; same shape as V9, versioned separately."""


class AddOns(WireModel):
    """Both add-on collections of a rate, each kept in input order."""

    add_on_v9: Annotated[tuple[AddOnV9, ...] | None, Repeated] = None
    add_on_v17: Annotated[tuple[AddOnV17, ...] | None, Repeated] = None

    wire_fields: ClassVar = (
        F("AddOnV9", "add_on_v9", each(nested)),
        F("AddOnV17", "add_on_v17", each(nested)),
    )


class Rate(WireModel):
    """Rate criteria for GetRates, and the chosen rate for CreateIndicium.

    Origin and destination can be given as ZIP/country or as full
    addresses under ``from`` / ``to``.
    """

    from_zip_code: str | None = None
    from_address: Address | None = Field(default=None, alias="from")
    to_zip_code: str | None = None
    to_country: str | None = None
    to_address: Address | None = Field(default=None, alias="to")
    amount: Decimal | None = None
    max_amount: Decimal | None = None
    service_type: str | None = None
    print_layout: str | None = None
    deliver_days: str | None = None
    error: str | None = None
    weight_lb: float | None = None
    weight_oz: float | None = None
    package_type: str | None = None
    requires_all_of: Any = None
    length: float | None = None
    width: float | None = None
    height: float | None = None
    ship_date: date | None = None
    insured_value: Decimal | None = None
    registered_value: Decimal | None = None
    cod_value: Decimal | None = None
    declared_value: Decimal | None = None
    non_machinable: bool | None = None
    rectangular_shaped: bool | None = None
    prohibitions: Any = None
    restrictions: Any = None
    observations: Any = None
    regulations: Any = None
    gem_notes: Any = None
    max_dimensions: str | None = None
    dim_weighting: str | None = None
    add_ons: AddOns | None = None
    effective_weight_in_ounces: float | None = None
    is_intra_bmc: bool | None = None
    zone: int | None = None
    rate_category: int | None = None
    to_state: str | None = None
    cubic_pricing: bool | None = None

    wire_fields: ClassVar = (
        F("FromZIPCode", "from_zip_code"),
        F("From", "from_address", nested),
        F("ToZIPCode", "to_zip_code"),
        F("ToCountry", "to_country"),
        F("To", "to_address", nested),
        F("Amount", "amount"),
        F("MaxAmount", "max_amount"),
        F("ServiceType", "service_type"),
        F("PrintLayout", "print_layout"),
        F("DeliverDays", "deliver_days"),
        F("Error", "error"),
        F("WeightLb", "weight_lb"),
        F("WeightOz", "weight_oz"),
        F("PackageType", "package_type"),
        F("RequiresAllOf", "requires_all_of", carry),
        F("Length", "length"),
        F("Width", "width"),
        F("Height", "height"),
        F("ShipDate", "ship_date", iso_date),
        F("InsuredValue", "insured_value"),
        F("RegisteredValue", "registered_value"),
        F("CODValue", "cod_value"),
        F("DeclaredValue", "declared_value"),
        F("NonMachinable", "non_machinable"),
        F("RectangularShaped", "rectangular_shaped"),
        F("Prohibitions", "prohibitions", carry),
        F("Restrictions", "restrictions", carry),
        F("Observations", "observations", carry),
        F("Regulations", "regulations", carry),
        F("GEMNotes", "gem_notes", carry),
        F("MaxDimensions", "max_dimensions"),
        F("DimWeighting", "dim_weighting"),
        F("AddOns", "add_ons", nested),
        F("EffectiveWeightInOunces", "effective_weight_in_ounces"),
        F("IsIntraBMC", "is_intra_bmc"),
        F("Zone", "zone"),
        F("RateCategory", "rate_category"),
        F("ToState", "to_state"),
        F("CubicPricing", "cubic_pricing"),
    )
