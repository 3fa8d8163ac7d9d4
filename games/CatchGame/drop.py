"""
CatchGame - Falling drop.

Drops fall straight down at a constant per-frame speed. Good drops score a
point when caught; bad drops cost a life.
"""
from dataclasses import dataclass
from enum import Enum

from models import Rectangle


class DropKind(str, Enum):
    """Types of drops."""
    GOOD = "good"
    BAD = "bad"


@dataclass
class Drop:
    """A falling object.

    Attributes:
        x: Left edge in pixels
        y: Top edge in pixels (negative while entering the field)
        speed: Pixels moved down per simulation frame
        kind: Good (catch it) or bad (avoid it)
        size: Width and height in pixels
    """
    x: float
    y: float
    speed: float
    kind: DropKind
    size: float

    @property
    def is_bad(self) -> bool:
        return self.kind == DropKind.BAD

    def get_bounds(self) -> Rectangle:
        """Bounding box for collision detection."""
        return Rectangle(x=self.x, y=self.y, width=self.size, height=self.size)

    def fall(self) -> None:
        """Advance one simulation frame."""
        self.y += self.speed

    def has_escaped(self, field_height: float, margin: float) -> bool:
        """Check if the drop has left the bottom of the field."""
        return self.y > field_height + margin
