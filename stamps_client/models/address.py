"""Address and credential records."""

from typing import ClassVar

from stamps_client.mapping import FieldDescriptor as F
from stamps_client.models.base import WireModel


class Credentials(WireModel):
    """Integration credentials sent inline or exchanged for a token."""

    integration_id: str | None = None
    username: str | None = None
    password: str | None = None

    wire_fields: ClassVar = (
        F("IntegrationID", "integration_id"),
        F("Username", "username"),
        F("Password", "password"),
    )


class Address(WireModel):
    """Postal address as accepted by the cleansing and label operations.

    No field is required here; the service decides what a usable address
    is. ``cleanse_hash`` / ``override_hash`` come back from CleanseAddress
    and must be sent unchanged with the label request.
    """

    full_name: str | None = None
    name_prefix: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    name_suffix: str | None = None
    title: str | None = None
    department: str | None = None
    company: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    zip_code_add_on: str | None = None
    dpb: str | None = None
    check_digit: str | None = None
    province: str | None = None
    postal_code: str | None = None
    country: str | None = None
    urbanization: str | None = None
    phone_number: str | None = None
    extension: str | None = None
    cleanse_hash: str | None = None
    override_hash: str | None = None

    wire_fields: ClassVar = (
        F("FullName", "full_name"),
        F("NamePrefix", "name_prefix"),
        F("FirstName", "first_name"),
        F("MiddleName", "middle_name"),
        F("LastName", "last_name"),
        F("NameSuffix", "name_suffix"),
        F("Title", "title"),
        F("Department", "department"),
        F("Company", "company"),
        F("Address1", "address1"),
        F("Address2", "address2"),
        F("City", "city"),
        F("State", "state"),
        F("ZIPCode", "zip_code"),
        F("ZIPCodeAddOn", "zip_code_add_on"),
        F("DPB", "dpb"),
        F("CheckDigit", "check_digit"),
        F("Province", "province"),
        F("PostalCode", "postal_code"),
        F("Country", "country"),
        F("Urbanization", "urbanization"),
        F("PhoneNumber", "phone_number"),
        F("Extension", "extension"),
        F("CleanseHash", "cleanse_hash"),
        F("OverrideHash", "override_hash"),
    )

    def merged_over(self, default: "Address | None") -> "Address":
        """Fill unset fields from ``default``; fields set here win.

        Args:
            default: Fallback address, typically the shipper's return address.

        Returns:
            New Address. ``self`` is returned unchanged when default is None.
        """
        if default is None:
            return self
        merged = default.model_dump(exclude_none=True)
        merged.update(self.model_dump(exclude_none=True))
        return Address.model_validate(merged)
