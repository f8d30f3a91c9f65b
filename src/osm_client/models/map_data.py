"""Map elements returned by the map endpoint and sent on node creation."""

from dataclasses import dataclass

from osm_client.models.tag import Tag


@dataclass(frozen=True)
class Node:
    """A point on the map. ``id`` is None until the server assigns one."""

    latitude: float
    longitude: float
    tags: tuple[Tag, ...] = ()
    id: int | None = None


@dataclass(frozen=True)
class Way:
    """An ordered list of node references."""

    id: int
    node_ids: tuple[int, ...] = ()
    tags: tuple[Tag, ...] = ()


@dataclass(frozen=True)
class Member:
    """A relation member."""

    type: str
    ref: int
    role: str = ""


@dataclass(frozen=True)
class Relation:
    """A group of members with roles."""

    id: int
    members: tuple[Member, ...] = ()
    tags: tuple[Tag, ...] = ()


MapElement = Node | Way | Relation
