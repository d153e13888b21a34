from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from .models import Level, Point


def plot_level(
    level: Level,
    path: Optional[List[Point]] = None,
    user_path: Optional[List[Point]] = None,
    explored: Optional[Sequence[Point]] = None,
    clearance: Optional[float] = None,
    save_to: Optional[str | Path] = None,
    show: bool = True,
) -> Tuple[Figure, Axes]:
    """Plot the field, walls, start/goal zones, and optionally paths.

    The y axis is inverted to match screen coordinates. ``clearance`` draws
    the inflated wall outline used for collision checks.
    """
    width, height = level.size.width, level.size.height

    fontsize = 16

    fig, ax = plt.subplots(figsize=(12, 12 * height / width))

    padding = max(width, height) * 0.02
    ax.set_xlim(-padding, width + padding)
    ax.set_ylim(height + padding, -padding)
    ax.set_aspect("equal")
    ax.grid(True, alpha=0.3)
    ax.tick_params(axis="both", labelsize=fontsize)

    border = patches.Rectangle(
        (0, 0), width, height,
        linewidth=2,
        edgecolor="black",
        facecolor="none",
    )
    ax.add_patch(border)

    for wall in level.walls:
        ax.add_patch(patches.Rectangle(
            (wall.x, wall.y), wall.width, wall.height,
            linewidth=1,
            edgecolor="darkgray",
            facecolor="gray",
            alpha=0.7,
        ))
        if clearance:
            grown = wall.expanded(clearance)
            ax.add_patch(patches.Rectangle(
                (grown.x, grown.y), grown.width, grown.height,
                linewidth=0.8,
                linestyle="--",
                edgecolor="gray",
                facecolor="none",
            ))

    ax.add_patch(patches.Circle(
        (level.start.x, level.start.y), level.start.radius,
        edgecolor="green",
        facecolor="green",
        alpha=0.3,
        label="Start",
    ))
    ax.add_patch(patches.Rectangle(
        (level.end.x, level.end.y), level.end.width, level.end.height,
        edgecolor="red",
        facecolor="red",
        alpha=0.3,
        label="Goal",
    ))

    if explored:
        ax.scatter(
            [p.x for p in explored], [p.y for p in explored],
            s=2,
            color="lightblue",
            alpha=0.5,
        )

    if path and len(path) >= 2:
        ax.plot([p.x for p in path], [p.y for p in path],
                color="blue", linewidth=2, label="Optimal", zorder=5)

    if user_path and len(user_path) >= 2:
        ax.plot([p.x for p in user_path], [p.y for p in user_path],
                color="orange", linewidth=1.5, label="User", zorder=6)

    ax.set_xlabel("X", fontsize=fontsize)
    ax.set_ylabel("Y", fontsize=fontsize)
    title = level.name or level.id or "Level"
    ax.set_title(f"{title} ({width:.0f} x {height:.0f})", fontsize=fontsize + 4)
    ax.legend(loc="best", fontsize=fontsize)

    if save_to:
        fig.savefig(save_to, dpi=150, bbox_inches="tight")

    if show:
        plt.show()

    return fig, ax
