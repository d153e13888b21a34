from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Represents a 2D point in screen coordinates (y grows downward)."""

    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Represents an axis-aligned rectangle (a wall or the goal zone).

    Attributes:
        x: X coordinate of the top-left corner.
        y: Y coordinate of the top-left corner.
        width: Extent in X direction.
        height: Extent in Y direction.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def x_min(self) -> float:
        """Left edge X coordinate."""
        return self.x

    @property
    def x_max(self) -> float:
        """Right edge X coordinate."""
        return self.x + self.width

    @property
    def y_min(self) -> float:
        """Top edge Y coordinate."""
        return self.y

    @property
    def y_max(self) -> float:
        """Bottom edge Y coordinate."""
        return self.y + self.height

    def expanded(self, margin: float) -> "Rect":
        """Return a copy grown by ``margin`` on all four sides."""
        return Rect(
            self.x - margin,
            self.y - margin,
            self.width + 2 * margin,
            self.height + 2 * margin,
        )


@dataclass(frozen=True)
class StartZone:
    """Circular start zone."""

    x: float
    y: float
    radius: float

    @property
    def center(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class LevelSize:
    width: float
    height: float


@dataclass(frozen=True)
class Level:
    """Represents a complete level.

    Attributes:
        size: Field dimensions; the playable area is [0, width] x [0, height].
        start: Circular start zone.
        end: Goal rectangle.
        walls: Rectangular obstacles in file order. Walls may extend past
            the field and are used as given.
        id: Level identifier.
        name: Display name.
    """

    size: LevelSize
    start: StartZone
    end: Rect
    walls: Tuple[Rect, ...] = field(default_factory=tuple)
    id: str = ""
    name: str = ""
