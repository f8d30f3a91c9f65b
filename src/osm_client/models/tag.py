"""Tags and bounding boxes shared by all OSM entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tag:
    """A key/value annotation on a map entity or changeset.

    Only ``key`` and ``value`` are read from or written to the API. The
    negation and regex flags are used when a tag acts as an Overpass filter.
    """

    key: str
    value: str | None = None
    is_negation: bool = False
    is_regex: bool = False

    def as_query_filter(self) -> str:
        """Render the tag as an Overpass QL filter, e.g. ``["amenity"="cafe"]``."""
        if self.value is None:
            return f'[!"{self.key}"]' if self.is_negation else f'["{self.key}"]'
        operator = "~" if self.is_regex else "="
        if self.is_negation:
            operator = "!" + operator
        return f'["{self.key}"{operator}"{self.value}"]'


@dataclass(frozen=True)
class BoundingBox:
    """An axis-aligned rectangle in degrees. Not validated."""

    left: float
    bottom: float
    right: float
    top: float

    @property
    def query_string(self) -> str:
        """The ``left,bottom,right,top`` value of the ``bbox`` query parameter."""
        return ",".join(f"{v:.7f}" for v in (self.left, self.bottom, self.right, self.top))

    @classmethod
    def from_query_string(cls, text: str) -> "BoundingBox":
        """Parse ``left,bottom,right,top``. Raises ValueError on malformed input."""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 4:
            msg = f"Expected four comma-separated numbers, got {text!r}"
            raise ValueError(msg)
        left, bottom, right, top = (float(p) for p in parts)
        return cls(left=left, bottom=bottom, right=right, top=top)
