"""Tests for the request body serializer."""

import pytest
from lxml import etree

from osm_client.core.codec.serializer import changeset_creation_payload, node_creation_payload
from osm_client.models.map_data import Node
from osm_client.models.tag import Tag


def test_changeset_payload_keeps_tag_order() -> None:
    tags = [Tag("b", "2"), Tag("a", "1"), Tag("b", "3")]

    payload = changeset_creation_payload(tags)

    assert payload == (
        b'<osm><changeset><tag k="b" v="2"/><tag k="a" v="1"/><tag k="b" v="3"/></changeset></osm>'
    )


def test_changeset_payload_without_tags() -> None:
    assert changeset_creation_payload([]) == b"<osm><changeset></changeset></osm>"


def test_node_payload() -> None:
    node = Node(latitude=-33.9249, longitude=18.4241, tags=(Tag("amenity", "bench"),))

    payload = node_creation_payload(node, changeset_id=12)

    assert payload == (
        b'<osm><node changeset="12" lat="-33.9249" lon="18.4241">'
        b'<tag k="amenity" v="bench"/></node></osm>'
    )


def test_node_payload_writes_integer_coordinates_as_floats() -> None:
    payload = node_creation_payload(Node(latitude=1, longitude=2), changeset_id=3)

    assert payload == b'<osm><node changeset="3" lat="1.0" lon="2.0"></node></osm>'


def test_special_characters_are_escaped() -> None:
    tags = [Tag("name", 'Fish & "Chips" <Ltd>')]

    payload = changeset_creation_payload(tags)

    assert b"&amp;" in payload
    assert b"&quot;" in payload
    assert b"&lt;" in payload
    tag = etree.fromstring(payload).find("changeset/tag")
    assert tag.get("v") == 'Fish & "Chips" <Ltd>'


def test_non_ascii_values_are_written_as_utf8() -> None:
    payload = changeset_creation_payload([Tag("name", "Café Zürich")])

    assert "Café Zürich".encode() in payload


def test_tag_without_value_is_written_empty() -> None:
    payload = changeset_creation_payload([Tag("fixme")])

    assert payload == b'<osm><changeset><tag k="fixme" v=""/></changeset></osm>'


@pytest.mark.parametrize("value", ["line\x0bbreak", "nul\x00byte"])
def test_values_xml_cannot_carry_raise_value_error(value: str) -> None:
    with pytest.raises(ValueError):
        changeset_creation_payload([Tag("note", value)])
    with pytest.raises(ValueError):
        node_creation_payload(Node(latitude=1.0, longitude=2.0, tags=(Tag("a", value),)), 7)
