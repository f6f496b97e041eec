"""Mapping engine: typed domain records to ordered wire structures.

Every domain type declares a ``wire_fields`` table of FieldDescriptor
entries. The engine walks that table in order, reads each source
attribute, skips absent values and applies the descriptor's transform.
Composite fields use the ``nested`` / ``each`` / ``collection`` transforms,
which call back into the engine, so a parent is only returned once every
child has been resolved into a WireStructure.

Example:
    class Credentials(WireModel):
        wire_fields: ClassVar = (
            FieldDescriptor("IntegrationID", "integration_id"),
            FieldDescriptor("Username", "username"),
        )

    to_wire(Credentials(integration_id="abc", username="me"))
    # WireStructure(IntegrationID='abc', Username='me')
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

from stamps_client.mapping.wire import WireStructure, freeze

Transform = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldDescriptor:
    """One row of a wire table.

    Attributes:
        wire_name: Field name as the remote service expects it.
        source: Attribute name on the domain record.
        transform: Optional callable applied to a present source value.
    """

    wire_name: str
    source: str
    transform: Transform | None = None


class Mappable(Protocol):
    """Anything carrying a wire table (all WireModel subclasses)."""

    wire_fields: tuple[FieldDescriptor, ...]


def to_wire(record: Mappable) -> WireStructure:
    """Resolve a domain record into its ordered wire structure.

    Args:
        record: Populated domain record with a ``wire_fields`` table.

    Returns:
        WireStructure with only the declared wire names, in table order.
        Fields whose source value is None are omitted.

    Raises:
        TypeError: If the record's type declares no wire table.
    """
    table = getattr(type(record), "wire_fields", None)
    if table is None:
        raise TypeError(f"{type(record).__name__} has no wire table")
    return WireStructure(_resolve_fields(record, table))


def _resolve_fields(
    record: Mappable, table: Iterable[FieldDescriptor]
) -> Iterable[tuple[str, Any]]:
    for descriptor in table:
        value = getattr(record, descriptor.source, None)
        if value is None:
            continue
        if descriptor.transform is not None:
            value = descriptor.transform(value)
            if value is None:
                continue
        yield descriptor.wire_name, value


# ── Transforms ─────────────────────────────────────────────────────────


def nested(value: Mappable) -> WireStructure:
    """Resolve a nested domain record."""
    return to_wire(value)


def each(transform: Transform) -> Transform:
    """Apply ``transform`` to every element, keeping input order."""

    def _each(values: Iterable[Any]) -> tuple[Any, ...]:
        return tuple(transform(item) for item in values)

    return _each


def wrap(key: str) -> Transform:
    """Wrap a scalar in its single-field wrapper shape, e.g. ``{guid: id}``."""

    def _wrap(value: Any) -> WireStructure:
        return WireStructure(((key, value),))

    return _wrap


def each_wrapped(key: str) -> Transform:
    """Wrap every scalar of a collection in the same single-field shape."""
    return each(wrap(key))


def collection(key: str, transform: Transform = nested) -> Transform:
    """Map a collection and place it under one container field.

    Used for array types such as ``CustomsLines``, whose wire shape is
    ``{CustomsLine: [line, line, ...]}``.
    """
    mapped = each(transform)

    def _collection(values: Iterable[Any]) -> WireStructure:
        return WireStructure(((key, mapped(values)),))

    return _collection


def iso_date(value: date | datetime | str) -> str:
    """Render a date as ``YYYY-MM-DD``; strings pass through."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def carry(value: Any) -> Any:
    """Carry opaque caller data through unmodified, frozen for transport."""
    return freeze(value)
