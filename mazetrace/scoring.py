import math
from typing import Optional, Sequence

from .models import Point
from .geometry import path_length


MAX_SCORE = 100


def efficiency_score(optimal_length: float, user_length: float) -> Optional[int]:
    """Percentage of the optimal length achieved by the user, capped at 100.

    Rounds half up. Returns None for a zero-length user path, where the
    ratio is undefined. A zero optimal length scores 0.
    """
    if user_length <= 0:
        return None
    ratio = 100 * optimal_length / user_length
    return min(MAX_SCORE, math.floor(ratio + 0.5))


def score_paths(optimal_path: Sequence[Point], user_path: Sequence[Point]) -> Optional[int]:
    """Score a user path against a search result; None if no path was found."""
    if not optimal_path:
        return None
    return efficiency_score(path_length(optimal_path), path_length(user_path))
