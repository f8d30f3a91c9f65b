"""Changeset models."""

from dataclasses import dataclass

from osm_client.models.tag import BoundingBox, Tag


@dataclass(frozen=True)
class Comment:
    """A single entry in a changeset discussion."""

    user_id: int
    username: str
    date: str
    content: str


@dataclass(frozen=True)
class Changeset:
    """A batch of edits made by one user.

    A changeset without edits has no bounding box; an open changeset has no
    closed timestamp.
    """

    id: int
    user_id: int
    username: str
    created_timestamp: str
    number_of_comments: int
    bounding_box: BoundingBox | None = None
    tags: tuple[Tag, ...] = ()
    comments: tuple[Comment, ...] = ()
    closed_timestamp: str | None = None

    @property
    def is_open(self) -> bool:
        return self.closed_timestamp is None
