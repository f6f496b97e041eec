"""Tests for the field-descriptor mapping engine."""

from datetime import date, datetime
from typing import ClassVar

import pytest
import xmltodict

from stamps_client.mapping import (
    FieldDescriptor,
    WireStructure,
    collection,
    each,
    each_wrapped,
    iso_date,
    nested,
    to_wire,
    wrap,
)
from stamps_client.models import WireModel


class Inner(WireModel):
    code: str | None = None

    wire_fields: ClassVar = (FieldDescriptor("Code", "code"),)


class Outer(WireModel):
    name: str | None = None
    inner: Inner | None = None
    inners: tuple[Inner, ...] | None = None
    ids: tuple[str, ...] | None = None

    wire_fields: ClassVar = (
        FieldDescriptor("Name", "name"),
        FieldDescriptor("Inner", "inner", nested),
        FieldDescriptor("Inners", "inners", collection("Item")),
        FieldDescriptor("Ids", "ids", each_wrapped("guid")),
    )


class Untabled:
    name = "x"


class TestToWire:
    """to_wire() over descriptor tables."""

    def test_emits_declared_names_in_table_order(self):
        record = Outer(ids=["a"], name="n", inner={"code": "c"})
        ws = to_wire(record)
        assert list(ws) == ["Name", "Inner", "Ids"]

    def test_absent_fields_are_omitted_not_null(self):
        ws = to_wire(Outer(name="only"))
        assert dict(ws) == {"Name": "only"}
        assert "Inner" not in ws

    def test_nested_records_resolve_to_structures(self):
        ws = to_wire(Outer(inner={"code": "c"}))
        assert isinstance(ws["Inner"], WireStructure)
        assert ws["Inner"] == {"Code": "c"}

    def test_collection_keeps_input_order(self):
        ws = to_wire(Outer(inners=[{"code": "3"}, {"code": "1"}, {"code": "2"}]))
        items = ws["Inners"]["Item"]
        assert [item["Code"] for item in items] == ["3", "1", "2"]

    def test_scalar_lists_are_wrapped_per_element(self):
        ws = to_wire(Outer(ids=["g1", "g2"]))
        assert ws.to_dict()["Ids"] == [{"guid": "g1"}, {"guid": "g2"}]

    def test_undeclared_input_is_dropped(self):
        ws = to_wire(Outer.model_validate({"name": "n", "favourite_colour": "red"}))
        assert list(ws) == ["Name"]

    def test_record_without_table_is_rejected(self):
        with pytest.raises(TypeError, match="Untabled has no wire table"):
            to_wire(Untabled())  # type: ignore[arg-type]

    def test_serializing_twice_gives_identical_xml(self):
        ws = to_wire(Outer(name="n", inner={"code": "c"}, inners=[{"code": "1"}], ids=["g"]))
        first = xmltodict.unparse({"Outer": ws.to_dict()})
        second = xmltodict.unparse({"Outer": ws.to_dict()})
        assert first == second
        assert first.index("<Name>") < first.index("<Inner>") < first.index("<Inners>")


class TestTransforms:
    """Individual transform helpers."""

    def test_wrap(self):
        assert wrap("guid")("abc") == {"guid": "abc"}

    def test_each_returns_tuple(self):
        assert each(str.upper)(["a", "b"]) == ("A", "B")

    @pytest.mark.parametrize("value,expected", [
        (date(2011, 6, 1), "2011-06-01"),
        (datetime(2011, 6, 1, 13, 30), "2011-06-01"),
        ("2011-06-01", "2011-06-01"),
    ])
    def test_iso_date(self, value, expected):
        assert iso_date(value) == expected
