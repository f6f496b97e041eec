"""Base class for domain records that map onto wire structures."""

from typing import Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict

from stamps_client.mapping import FieldDescriptor, WireStructure, to_wire


def as_sequence(value: Any) -> Any:
    """Wrap a lone element in a list.

    Parsed replies collapse a one-element collection into the element
    itself, so a rate with a single add-on arrives as a mapping.
    """
    if value is None or isinstance(value, (list, tuple)):
        return value
    return [value]


Repeated = BeforeValidator(as_sequence)


class WireModel(BaseModel):
    """Immutable domain record with a declared wire table.

    Undeclared input keys are dropped at validation time so callers can
    pass richer dicts than the service understands.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    wire_fields: ClassVar[tuple[FieldDescriptor, ...]]

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Return ``value`` as an instance of this model.

        Accepts an instance (returned as-is) or a mapping of field names.
        """
        if isinstance(value, cls):
            return value
        return cls.model_validate(value)

    def to_wire(self) -> WireStructure:
        """Resolve this record into its ordered wire structure."""
        return to_wire(self)
