"""Parse OSM API XML responses into domain models.

Nothing in this module raises on bad input. A document that is not
well-formed yields an empty list or None; an element that lacks a required
attribute (or whose attribute does not convert) is dropped on its own
without affecting its siblings.
"""

import re

from lxml import etree
from loguru import logger

from osm_client.models.changeset import Changeset, Comment
from osm_client.models.map_data import MapElement, Member, Node, Relation, Way
from osm_client.models.tag import BoundingBox, Tag
from osm_client.models.user import Permission, User

_PERMISSION_VALUES = {p.value for p in Permission}
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_document(data: bytes) -> etree._Element | None:
    # One parser per call: lxml parsers are not thread-safe.
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        logger.warning("Discarding malformed XML response: {}", e)
        return None


def _to_int(raw: str | None) -> int | None:
    # ASCII digits only: int() also accepts underscores and non-ASCII digits.
    if raw is None or not _INTEGER.fullmatch(raw):
        return None
    return int(raw)


def _int_attribute(element: etree._Element, name: str) -> int | None:
    return _to_int(element.get(name))


def _float_attribute(element: etree._Element, name: str) -> float | None:
    raw = element.get(name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _parse_tags(element: etree._Element) -> tuple[Tag, ...]:
    tags: list[Tag] = []
    for tag_element in element.findall("tag"):
        key = tag_element.get("k")
        value = tag_element.get("v")
        if key is None or value is None:
            continue
        tags.append(Tag(key=key, value=value))
    return tuple(tags)


def _parse_bounding_box(element: etree._Element) -> BoundingBox | None:
    """All four extents must be present and numeric, otherwise there is no box."""
    min_lat = _float_attribute(element, "min_lat")
    min_lon = _float_attribute(element, "min_lon")
    max_lat = _float_attribute(element, "max_lat")
    max_lon = _float_attribute(element, "max_lon")
    if min_lat is None or min_lon is None or max_lat is None or max_lon is None:
        return None
    return BoundingBox(left=min_lon, bottom=min_lat, right=max_lon, top=max_lat)


def _parse_comment(element: etree._Element) -> Comment | None:
    user_id = _int_attribute(element, "uid")
    username = element.get("user")
    date = element.get("date")
    text_element = element.find("text")
    content = text_element.text if text_element is not None else None
    if user_id is None or username is None or date is None or content is None:
        return None
    return Comment(user_id=user_id, username=username, date=date, content=content)


def _parse_comments(element: etree._Element) -> tuple[Comment, ...]:
    comments = (_parse_comment(e) for e in element.findall("discussion/comment"))
    return tuple(c for c in comments if c is not None)


def _parse_changeset(element: etree._Element) -> Changeset | None:
    changeset_id = _int_attribute(element, "id")
    user_id = _int_attribute(element, "uid")
    username = element.get("user")
    created_at = element.get("created_at")
    comments_count = _int_attribute(element, "comments_count")
    if (
        changeset_id is None
        or user_id is None
        or username is None
        or created_at is None
        or comments_count is None
    ):
        logger.debug("Skipping changeset element with missing attributes: {}", dict(element.attrib))
        return None

    return Changeset(
        id=changeset_id,
        user_id=user_id,
        username=username,
        created_timestamp=created_at,
        number_of_comments=comments_count,
        bounding_box=_parse_bounding_box(element),
        tags=_parse_tags(element),
        comments=_parse_comments(element),
        closed_timestamp=element.get("closed_at"),
    )


def parse_changesets(data: bytes) -> list[Changeset]:
    """Parse every ``<changeset>`` under the root, in document order."""
    root = _parse_document(data)
    if root is None:
        return []
    changesets = (_parse_changeset(e) for e in root.findall("changeset"))
    return [c for c in changesets if c is not None]


def parse_user(data: bytes) -> User | None:
    """Parse the ``<user>`` element of a user details response."""
    root = _parse_document(data)
    if root is None:
        return None
    element = root.find("user")
    if element is None:
        return None
    user_id = _int_attribute(element, "id")
    display_name = element.get("display_name")
    if user_id is None or display_name is None:
        return None
    return User(id=user_id, display_name=display_name)


def parse_permissions(data: bytes) -> list[Permission]:
    """Parse granted permissions, dropping names this client does not know."""
    root = _parse_document(data)
    if root is None:
        return []
    permissions: list[Permission] = []
    for element in root.findall("permissions/permission"):
        name = element.get("name")
        if name in _PERMISSION_VALUES:
            permissions.append(Permission(name))
        else:
            logger.debug("Ignoring unknown permission {!r}", name)
    return permissions


def _parse_node(element: etree._Element) -> Node | None:
    node_id = _int_attribute(element, "id")
    lat = _float_attribute(element, "lat")
    lon = _float_attribute(element, "lon")
    if node_id is None or lat is None or lon is None:
        return None
    return Node(latitude=lat, longitude=lon, tags=_parse_tags(element), id=node_id)


def _parse_way(element: etree._Element) -> Way | None:
    way_id = _int_attribute(element, "id")
    if way_id is None:
        return None
    node_ids: list[int] = []
    for nd in element.findall("nd"):
        ref = _int_attribute(nd, "ref")
        if ref is None:
            return None
        node_ids.append(ref)
    return Way(id=way_id, node_ids=tuple(node_ids), tags=_parse_tags(element))


def _parse_relation(element: etree._Element) -> Relation | None:
    relation_id = _int_attribute(element, "id")
    if relation_id is None:
        return None
    members: list[Member] = []
    for member in element.findall("member"):
        member_type = member.get("type")
        ref = _int_attribute(member, "ref")
        role = member.get("role")
        if member_type is None or ref is None or role is None:
            return None
        members.append(Member(type=member_type, ref=ref, role=role))
    return Relation(id=relation_id, members=tuple(members), tags=_parse_tags(element))


_ELEMENT_PARSERS = {
    "node": _parse_node,
    "way": _parse_way,
    "relation": _parse_relation,
}


def parse_map_data(data: bytes) -> list[MapElement]:
    """Parse nodes, ways and relations in document order.

    Other children of the root (``bounds``, ``note``, ``meta``) are ignored.
    """
    root = _parse_document(data)
    if root is None:
        return []
    elements: list[MapElement] = []
    for child in root:
        parse = _ELEMENT_PARSERS.get(child.tag) if isinstance(child.tag, str) else None
        if parse is None:
            continue
        element = parse(child)
        if element is None:
            logger.debug("Skipping malformed <{}> element: {}", child.tag, dict(child.attrib))
            continue
        elements.append(element)
    return elements


def parse_entity_id(data: bytes) -> int | None:
    """Parse the plain-text id returned by the create endpoints."""
    try:
        entity_id = _to_int(data.decode("utf-8").strip())
    except UnicodeDecodeError:
        entity_id = None
    if entity_id is None:
        logger.warning("Response is not an entity id: {!r}", data[:64])
    return entity_id
