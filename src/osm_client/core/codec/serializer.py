"""Build the XML request bodies for the create endpoints.

lxml raises ValueError for keys or values holding characters XML cannot
carry (NUL, most C0 control characters).
"""

from collections.abc import Iterable

from lxml import etree

from osm_client.models.map_data import Node
from osm_client.models.tag import Tag


def _append_tags(parent: etree._Element, tags: Iterable[Tag]) -> None:
    for tag in tags:
        etree.SubElement(parent, "tag", k=tag.key, v=tag.value or "")
    if len(parent) == 0:
        # Force an explicit end tag instead of a self-closing element.
        parent.text = ""


def _to_bytes(root: etree._Element) -> bytes:
    return etree.tostring(root, encoding="utf-8", xml_declaration=False)


def changeset_creation_payload(tags: Iterable[Tag]) -> bytes:
    """``<osm><changeset><tag k=".." v=".."/>...</changeset></osm>``, tags in input order."""
    root = etree.Element("osm")
    changeset = etree.SubElement(root, "changeset")
    _append_tags(changeset, tags)
    return _to_bytes(root)


def node_creation_payload(node: Node, changeset_id: int) -> bytes:
    """``<osm><node changeset=".." lat=".." lon="..">...</node></osm>``."""
    root = etree.Element("osm")
    element = etree.SubElement(root, "node")
    # Attribute order is preserved by lxml.
    element.set("changeset", str(changeset_id))
    element.set("lat", repr(float(node.latitude)))
    element.set("lon", repr(float(node.longitude)))
    _append_tags(element, node.tags)
    return _to_bytes(root)
