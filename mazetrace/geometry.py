import math
from typing import Iterable, List, Sequence

import numpy as np

from .models import Point, Rect


# Pointer radius; walls are inflated by this margin in both the live check
# and the path search.
CURSOR_RADIUS = 6.0


def dist(a: Point, b: Point) -> float:
    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


def point_in_bounds(p: Point, width: float, height: float) -> bool:
    return 0 <= p.x <= width and 0 <= p.y <= height


def point_in_rect(p: Point, rect: Rect) -> bool:
    """Closed-interval containment: points on the boundary are inside."""
    return (rect.x_min <= p.x <= rect.x_max and
            rect.y_min <= p.y <= rect.y_max)


def point_in_circle(p: Point, center: Point, radius: float) -> bool:
    dx = p.x - center.x
    dy = p.y - center.y
    return dx * dx + dy * dy <= radius * radius


def segment_intersects_segment(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Check if segment P1P2 properly crosses segment P3P4.

    Solves for the parameters lambda (along P1P2) and gamma (along P3P4) and
    requires both strictly inside (0, 1). Touching at an endpoint does not
    count. Parallel and collinear segments never intersect.
    """
    det = (p2.x - p1.x) * (p4.y - p3.y) - (p4.x - p3.x) * (p2.y - p1.y)
    if det == 0:
        return False

    lam = ((p4.y - p3.y) * (p4.x - p1.x) + (p3.x - p4.x) * (p4.y - p1.y)) / det
    gamma = ((p1.y - p2.y) * (p4.x - p1.x) + (p2.x - p1.x) * (p4.y - p1.y)) / det

    return 0 < lam < 1 and 0 < gamma < 1


def rect_edges(rect: Rect) -> List[tuple[Point, Point]]:
    """Edges in order top, right, bottom, left."""
    top_left = Point(rect.x_min, rect.y_min)
    top_right = Point(rect.x_max, rect.y_min)
    bottom_right = Point(rect.x_max, rect.y_max)
    bottom_left = Point(rect.x_min, rect.y_max)
    return [
        (top_left, top_right),
        (top_right, bottom_right),
        (bottom_right, bottom_left),
        (bottom_left, top_left),
    ]


def segment_intersects_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """Check if segment P1P2 touches rectangle.

    An endpoint inside the (closed) rectangle is a hit. Otherwise the segment
    must properly cross one of the four edges. A segment running exactly
    along an edge is not reported.
    """
    if point_in_rect(p1, rect) or point_in_rect(p2, rect):
        return True

    return any(
        segment_intersects_segment(p1, p2, a, b) for a, b in rect_edges(rect)
    )


# =============================================================================
# Wall utilities
# =============================================================================


def inflate_rect(rect: Rect, margin: float) -> Rect:
    return rect.expanded(margin)


def inflate_walls(walls: Iterable[Rect], margin: float) -> List[Rect]:
    return [inflate_rect(w, margin) for w in walls]


def segment_hits_walls(
    p1: Point,
    p2: Point,
    walls: Iterable[Rect],
    clearance: float = CURSOR_RADIUS,
) -> bool:
    """Check segment P1P2 against every wall grown by ``clearance``."""
    return any(
        segment_intersects_rect(p1, p2, inflate_rect(w, clearance)) for w in walls
    )


# =============================================================================
# Path utilities
# =============================================================================


def path_length(path: Sequence[Point]) -> float:
    """Calculate total length of a path."""
    if len(path) < 2:
        return 0.0
    pts = np.array([(p.x, p.y) for p in path], dtype=float)
    steps = np.diff(pts, axis=0)
    return float(np.hypot(steps[:, 0], steps[:, 1]).sum())


def path_collides(
    path: Sequence[Point],
    walls: Iterable[Rect],
    clearance: float = CURSOR_RADIUS,
) -> bool:
    """Check if any segment of the path touches an inflated wall."""
    walls = list(walls)
    for i in range(len(path) - 1):
        if segment_hits_walls(path[i], path[i + 1], walls, clearance):
            return True
    return False
