import matplotlib.pyplot as plt

from mazetrace.algorithms.astar import GridAStar
from mazetrace.visualization import plot_level


def test_plot_level_draws_paths(switchback_level, tmp_path):
    result = GridAStar(switchback_level).plan()
    out = tmp_path / "plot.png"

    fig, ax = plot_level(
        switchback_level,
        path=result.path,
        user_path=result.path[::2],
        explored=result.explored,
        clearance=6,
        save_to=out,
        show=False,
    )

    assert out.exists()
    assert ax.yaxis_inverted()
    labels = [line.get_label() for line in ax.get_lines()]
    assert "Optimal" in labels and "User" in labels
    plt.close(fig)


def test_plot_level_without_paths(open_level):
    fig, ax = plot_level(open_level, show=False)
    assert len(ax.get_lines()) == 0
    plt.close(fig)
