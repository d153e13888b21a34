"""Per-sample pointer checks and offline replay of recorded traces."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .models import Level, Point
from .geometry import (
    CURSOR_RADIUS,
    point_in_bounds,
    point_in_circle,
    point_in_rect,
    segment_hits_walls,
)


class MoveOutcome(Enum):
    CLEAR = "clear"
    WALL_HIT = "wall_hit"
    GOAL_REACHED = "goal_reached"
    OUT_OF_BOUNDS = "out_of_bounds"


class TraceStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class TraceResult:
    status: TraceStatus
    path: List[Point] = field(default_factory=list)
    outcome: Optional[MoveOutcome] = None
    failed_at: Optional[int] = None  # Index of the sample that lost


def in_start_zone(level: Level, p: Point) -> bool:
    return point_in_circle(p, level.start.center, level.start.radius)


def classify_move(
    level: Level,
    prev: Point,
    current: Point,
    clearance: float = CURSOR_RADIUS,
) -> MoveOutcome:
    """Decide what a single pointer move from ``prev`` to ``current`` does.

    Wall contact is checked first, then the goal, then the field bounds.
    """
    if segment_hits_walls(prev, current, level.walls, clearance):
        return MoveOutcome.WALL_HIT

    if point_in_rect(current, level.end):
        return MoveOutcome.GOAL_REACHED

    if not point_in_bounds(current, level.size.width, level.size.height):
        return MoveOutcome.OUT_OF_BOUNDS

    return MoveOutcome.CLEAR


def replay_trace(
    level: Level,
    samples: Sequence[Point],
    clearance: float = CURSOR_RADIUS,
) -> TraceResult:
    """Replay pointer samples the way the live game consumes them.

    Samples are ignored until one lands in the start zone. From then on each
    move is classified against the previous sample until the goal is reached
    or a move fails. The returned path starts at the start-zone sample and
    ends at the terminating sample (or the last sample if the trace stops
    while still playing).
    """
    result = TraceResult(status=TraceStatus.IDLE)
    prev: Optional[Point] = None

    for i, p in enumerate(samples):
        if result.status is TraceStatus.IDLE:
            if in_start_zone(level, p):
                result.status = TraceStatus.PLAYING
                result.path.append(p)
                prev = p
            continue

        outcome = classify_move(level, prev, p, clearance)
        result.outcome = outcome
        result.path.append(p)

        if outcome is MoveOutcome.GOAL_REACHED:
            result.status = TraceStatus.WON
            return result
        if outcome is not MoveOutcome.CLEAR:
            result.status = TraceStatus.LOST
            result.failed_at = i
            return result

        prev = p

    return result
