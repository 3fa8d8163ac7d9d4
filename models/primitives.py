"""
Shared primitive data types for the game engines.

Rectangles are the collision bounds of the catch game's paddle and drops.
"""

from pydantic import BaseModel, field_validator, computed_field, ConfigDict


class Rectangle(BaseModel):
    """Immutable rectangle defined by position and dimensions.

    Used for bounding boxes of the player and falling drops.
    Position is at top-left corner (pygame convention).

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of rectangle (must be positive)
        height: Height of rectangle (must be positive)

    Examples:
        >>> rect = Rectangle(x=100.0, y=100.0, width=50.0, height=50.0)
        >>> rect.right
        150.0
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @computed_field
    @property
    def left(self) -> float:
        """Get left edge x coordinate."""
        return self.x

    @computed_field
    @property
    def right(self) -> float:
        """Get right edge x coordinate."""
        return self.x + self.width

    @computed_field
    @property
    def top(self) -> float:
        """Get top edge y coordinate."""
        return self.y

    @computed_field
    @property
    def bottom(self) -> float:
        """Get bottom edge y coordinate."""
        return self.y + self.height

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle overlaps another (axis-aligned).

        Two rectangles intersect unless one lies entirely above, below,
        left of, or right of the other. Touching edges count as overlap.

        Args:
            other: Another rectangle to check intersection with

        Returns:
            True if rectangles overlap

        Examples:
            >>> rect1 = Rectangle(x=0.0, y=0.0, width=100.0, height=100.0)
            >>> rect2 = Rectangle(x=50.0, y=50.0, width=100.0, height=100.0)
            >>> rect1.intersects(rect2)
            True
        """
        return not (self.bottom < other.top or
                    self.top > other.bottom or
                    self.right < other.left or
                    self.left > other.right)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
