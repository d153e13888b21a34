from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from mazetrace.models import Level, LevelSize, Rect, StartZone


REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def levels_dir() -> Path:
    return REPO_ROOT / "levels"


@pytest.fixture
def traces_dir() -> Path:
    return REPO_ROOT / "traces"


@pytest.fixture
def open_level() -> Level:
    return Level(
        size=LevelSize(800, 600),
        start=StartZone(50, 50, 20),
        end=Rect(750, 550, 30, 30),
        walls=(),
        id="open",
    )


@pytest.fixture
def switchback_level() -> Level:
    return Level(
        size=LevelSize(800, 600),
        start=StartZone(60, 300, 25),
        end=Rect(720, 270, 50, 60),
        walls=(
            Rect(250, 0, 30, 400),
            Rect(500, 200, 30, 400),
        ),
        id="switchback",
    )


@pytest.fixture
def sealed_level() -> Level:
    return Level(
        size=LevelSize(400, 300),
        start=StartZone(40, 40, 20),
        end=Rect(340, 240, 30, 30),
        walls=(Rect(-20, 140, 440, 20),),
        id="sealed",
    )
