"""
Shared primitive data types for the game core.

This module provides the basic geometric types used by the entity physics,
the obstacle generator and the collision detector.
"""

from pydantic import BaseModel, Field, field_validator, computed_field, ConfigDict


class Point2D(BaseModel):
    """Immutable 2D point for spawn positions and offsets.

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downward)

    Examples:
        >>> spawn = Point2D(x=100.0, y=300.0)
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class Resolution(BaseModel):
    """Canvas dimensions in pixels.

    Attributes:
        width: Width in pixels (must be positive)
        height: Height in pixels (must be positive)

    Examples:
        >>> canvas = Resolution(width=400, height=600)
        >>> canvas.aspect_ratio
        0.6666666666666666
    """
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    @computed_field
    @property
    def aspect_ratio(self) -> float:
        """Calculate aspect ratio (width / height)."""
        return self.width / self.height

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Resolution({self.width}x{self.height})"


class Rectangle(BaseModel):
    """Immutable axis-aligned rectangle.

    Position is the top-left corner (pygame convention). Height may be
    ``float('inf')`` for shapes that extend to the bottom of the world,
    such as the lower segment of a pipe.

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of rectangle (must be positive)
        height: Height of rectangle (must be positive)

    Examples:
        >>> rect = Rectangle(x=400.0, y=0.0, width=52.0, height=200.0)
        >>> rect.right
        452.0
        >>> rect.intersects(Rectangle(x=420.0, y=150.0, width=10.0, height=10.0))
        True
    """
    x: float
    y: float
    width: float
    height: float

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if not v > 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @computed_field
    @property
    def area(self) -> float:
        """Area in square pixels."""
        return self.width * self.height

    @computed_field
    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(
            x=self.x + self.width / 2,
            y=self.y + self.height / 2
        )

    @computed_field
    @property
    def left(self) -> float:
        return self.x

    @computed_field
    @property
    def right(self) -> float:
        return self.x + self.width

    @computed_field
    @property
    def top(self) -> float:
        return self.y

    @computed_field
    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains_point(self, point: Point2D) -> bool:
        """Check if a point is inside the rectangle (edges included).

        Args:
            point: The point to check

        Returns:
            True if point is inside or on the boundary of the rectangle
        """
        return (self.left <= point.x <= self.right and
                self.top <= point.y <= self.bottom)

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle shares area with another rectangle.

        Uses strict inequalities on all four sides, so rectangles that only
        touch along an edge or a corner do not intersect.

        Args:
            other: Another rectangle to check intersection with

        Returns:
            True if rectangles overlap

        Examples:
            >>> a = Rectangle(x=0.0, y=0.0, width=10.0, height=10.0)
            >>> a.intersects(Rectangle(x=10.0, y=0.0, width=10.0, height=10.0))
            False
        """
        return (self.left < other.right and
                self.right > other.left and
                self.top < other.bottom and
                self.bottom > other.top)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
