# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from dataclasses import dataclass, field

import pytest

from xhttp.binding import FORM, JSON, XML
from xhttp.errors import DecodeError


@dataclass
class Item:
    id: int = 0
    name: str = ""
    active: bool = False
    tags: list = field(default_factory=list)


def test_binding_names():
    assert JSON.name == "json"
    assert XML.name == "xml"
    assert FORM.name == "form"


def test_json_binds_into_dict_and_dataclass():
    target = {}
    JSON.bind(b'{"id": 7, "name": "widget"}', target)
    assert target == {"id": 7, "name": "widget"}

    item = Item()
    JSON.bind(b'{"id": 7, "name": "widget", "unknown": 1}', item)
    assert item == Item(id=7, name="widget")
    assert not hasattr(item, "unknown")


def test_json_binds_list_into_sequence():
    target = ["stale"]
    JSON.bind(b"[1, 2, 3]", target)
    assert target == [1, 2, 3]


def test_json_rejects_malformed_payload():
    with pytest.raises(DecodeError) as excinfo:
        JSON.bind(b"{not json", {})
    assert excinfo.value.binding == "json"


def test_json_rejects_shape_mismatch():
    with pytest.raises(DecodeError):
        JSON.bind(b"[1, 2]", {})
    with pytest.raises(DecodeError):
        JSON.bind(b'{"id": 1}', [])
    with pytest.raises(DecodeError):
        JSON.bind(b'"text"', Item())


def test_json_rejects_unwritable_destination():
    with pytest.raises(DecodeError):
        JSON.bind(b'{"id": 1}', None)


def test_xml_binds_into_dataclass_with_type_coercion():
    item = Item()
    XML.bind(b"<item><id>7</id><name> widget </name><active>true</active></item>", item)
    assert item.id == 7
    assert item.name == "widget"
    assert item.active is True


def test_xml_binds_into_dict_with_attributes_and_repeated_tags():
    target = {}
    XML.bind(b'<order ref="A1"><line>x</line><line>y</line><total>3</total></order>', target)
    assert target == {"ref": "A1", "line": ["x", "y"], "total": "3"}


def test_xml_binds_children_into_sequence():
    target = []
    XML.bind(b"<items><item>a</item><item>b</item></items>", target)
    assert target == ["a", "b"]


def test_xml_rejects_malformed_payload_and_bad_values():
    with pytest.raises(DecodeError):
        XML.bind(b"<item><id>7</item>", {})
    with pytest.raises(DecodeError):
        XML.bind(b"<item><id>seven</id></item>", Item())
    with pytest.raises(DecodeError):
        XML.bind(b"<id>7</id>", {})


def test_form_binding_unwraps_single_values():
    target = {}
    FORM.bind(b"a=1&b=2&b=3", target)
    assert target == {"a": "1", "b": ["2", "3"]}

    item = Item()
    FORM.bind(b"id=9&active=0", item)
    assert item.id == 9
    assert item.active is False


def test_form_binding_rejects_malformed_payload():
    with pytest.raises(DecodeError):
        FORM.bind(b"novalue", {})


def test_json_rejects_values_of_the_wrong_type_for_an_attribute():
    item = Item()
    with pytest.raises(DecodeError) as excinfo:
        JSON.bind(b'{"id": "not-a-number"}', item)
    assert "id" in str(excinfo.value)
    assert item.id == 0

    with pytest.raises(DecodeError):
        JSON.bind(b'{"active": 1}', Item())
    with pytest.raises(DecodeError):
        JSON.bind(b'{"id": true}', Item())
    with pytest.raises(DecodeError):
        JSON.bind(b'{"name": 5}', Item())


@dataclass
class Reading:
    value: float = 0.0
    label: object = None


def test_json_accepts_int_for_float_and_anything_for_untyped_attributes():
    reading = Reading()
    JSON.bind(b'{"value": 3, "label": {"unit": "C"}}', reading)
    assert reading.value == 3
    assert reading.label == {"unit": "C"}

    item = Item()
    JSON.bind(b'{"tags": ["a"], "active": true}', item)
    assert item.tags == ["a"]
    assert item.active is True
