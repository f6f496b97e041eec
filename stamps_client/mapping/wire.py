"""Immutable, ordered wire structures.

A WireStructure is the fully resolved form of a request: field names exactly
as the remote service expects them, in the order the service schema declares
them. Nested composites are WireStructures themselves and collections are
tuples, so nothing handed to the transport can be recomputed or reordered.

Example:
    ws = WireStructure([("FromZIPCode", "45440"), ("ToZIPCode", "45458")])
    ws.to_dict()  # {"FromZIPCode": "45440", "ToZIPCode": "45458"}
"""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class WireStructure(Mapping[str, Any]):
    """Read-only ordered mapping of wire field name to resolved value.

    Attributes:
        _items: Field/value pairs in emission order.
        _index: Lookup table built once from _items.
    """

    __slots__ = ("_items", "_index")

    def __init__(self, items: Iterable[tuple[str, Any]] = ()) -> None:
        """Freeze the given field/value pairs.

        Args:
            items: Ordered (wire_name, value) pairs. Later duplicates of a
                name are rejected.

        Raises:
            ValueError: If a wire name appears more than once.
        """
        pairs = tuple(items)
        index: dict[str, Any] = {}
        for key, value in pairs:
            if key in index:
                raise ValueError(f"Duplicate wire field '{key}'")
            index[key] = value
        self._items = pairs
        self._index = index

    def __getitem__(self, key: str) -> Any:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        inner = ", ".join(f"{key}={value!r}" for key, value in self._items)
        return f"WireStructure({inner})"

    def __eq__(self, other: object) -> bool:
        """Order-sensitive equality; wire order is part of the value."""
        if isinstance(other, WireStructure):
            return self._items == other._items
        if isinstance(other, Mapping):
            return list(self.items()) == list(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._items)

    def pairs(self) -> tuple[tuple[str, Any], ...]:
        """Return the ordered field/value pairs."""
        return self._items

    def without(self, *names: str) -> "WireStructure":
        """Return a copy with the named fields removed, order kept."""
        return WireStructure((k, v) for k, v in self._items if k not in names)

    def prepend(self, name: str, value: Any) -> "WireStructure":
        """Return a copy with one field placed ahead of the existing ones."""
        return WireStructure(((name, value), *self._items))

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain nested dicts and lists for a serializer.

        Dict insertion order follows the wire order, so serializing the
        result any number of times yields the same element order.
        """
        return {key: _plain(value) for key, value in self._items}


def _plain(value: Any) -> Any:
    if isinstance(value, WireStructure):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


def freeze(value: Any) -> Any:
    """Recursively turn caller-supplied dicts and lists into wire values.

    Dicts become WireStructures (keeping their iteration order) and lists
    or tuples become tuples. Scalars pass through untouched.

    Args:
        value: Arbitrary nested data.

    Returns:
        An equivalent value made only of WireStructures, tuples and scalars.
    """
    if isinstance(value, WireStructure):
        return value
    if isinstance(value, Mapping):
        return WireStructure((str(k), freeze(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value
