import json
from pathlib import Path
from typing import Any, List, Mapping

from .models import Level, LevelSize, Point, Rect, StartZone


class LevelValidationError(Exception):
    """Raised when level validation fails."""
    pass


class LevelParseError(Exception):
    """Raised when a level or trace file cannot be parsed."""
    pass


def _read_json(filepath: Path) -> Any:
    """Read and decode a JSON file."""
    try:
        content = filepath.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LevelParseError(f"File not found: {filepath}")
    except PermissionError:
        raise LevelParseError(f"Permission denied: {filepath}")

    if not content.strip():
        raise LevelParseError(f"File is empty: {filepath}")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise LevelParseError(f"Invalid JSON in {filepath}: {e}")


def _as_float(value: Any, what: str) -> float:
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise LevelParseError(f"{what} must be a number, got {value!r}")
    return float(value)


def _number(obj: Mapping[str, Any], key: str, where: str) -> float:
    if not isinstance(obj, Mapping) or key not in obj:
        raise LevelParseError(f"Missing field '{key}' in {where}")
    return _as_float(obj[key], f"Field '{key}' in {where}")


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    if key not in data:
        raise LevelParseError(f"Missing section '{key}'")
    section = data[key]
    if not isinstance(section, Mapping):
        raise LevelParseError(f"Section '{key}' must be an object")
    return section


def _parse_rect(obj: Mapping[str, Any], where: str) -> Rect:
    return Rect(
        _number(obj, "x", where),
        _number(obj, "y", where),
        _number(obj, "width", where),
        _number(obj, "height", where),
    )


def _validate_size(size: LevelSize) -> None:
    """Validate field dimensions."""
    if size.width <= 0:
        raise LevelValidationError(f"size.width must be positive, got {size.width}")
    if size.height <= 0:
        raise LevelValidationError(f"size.height must be positive, got {size.height}")


def _validate_start(start: StartZone, size: LevelSize) -> None:
    if start.radius <= 0:
        raise LevelValidationError(f"start.radius must be positive, got {start.radius}")
    if not (0 <= start.x <= size.width and 0 <= start.y <= size.height):
        raise LevelValidationError(
            f"start ({start.x}, {start.y}) is outside level bounds "
            f"[0, {size.width}] x [0, {size.height}]"
        )


def _validate_rect_dimensions(rect: Rect, name: str) -> None:
    if rect.width < 0 or rect.height < 0:
        raise LevelValidationError(
            f"{name}: dimensions must be non-negative, got {rect.width} x {rect.height}"
        )


def _validate_end(end: Rect, size: LevelSize) -> None:
    """Validate that the goal zone lies inside the field."""
    _validate_rect_dimensions(end, "end")
    if end.x_min < 0 or end.y_min < 0 or end.x_max > size.width or end.y_max > size.height:
        raise LevelValidationError(
            f"end [({end.x_min}, {end.y_min}) to ({end.x_max}, {end.y_max})] "
            f"extends beyond level bounds [0, {size.width}] x [0, {size.height}]"
        )


def parse_level(data: Any, default_id: str = "") -> Level:
    """Build a validated Level from decoded JSON data.

    Walls are only checked for non-negative dimensions; they may lie partly
    or fully outside the field.
    """
    if not isinstance(data, Mapping):
        raise LevelParseError("Level data must be a JSON object")

    size_obj = _section(data, "size")
    size = LevelSize(_number(size_obj, "width", "size"), _number(size_obj, "height", "size"))

    start_obj = _section(data, "start")
    start = StartZone(
        _number(start_obj, "x", "start"),
        _number(start_obj, "y", "start"),
        _number(start_obj, "radius", "start"),
    )

    end = _parse_rect(_section(data, "end"), "end")

    walls_data = data.get("walls", [])
    if not isinstance(walls_data, list):
        raise LevelParseError("Section 'walls' must be a list")
    walls = tuple(_parse_rect(w, f"walls[{i}]") for i, w in enumerate(walls_data))

    _validate_size(size)
    _validate_start(start, size)
    _validate_end(end, size)
    for i, wall in enumerate(walls):
        _validate_rect_dimensions(wall, f"walls[{i}]")

    level_id = str(data.get("id", default_id))
    return Level(
        size=size,
        start=start,
        end=end,
        walls=walls,
        id=level_id,
        name=str(data.get("name", level_id)),
    )


def load_level(filepath: str | Path) -> Level:
    """Load a level from a JSON file.

    Args:
        filepath: Path to the level file.

    Returns:
        Level object with all data.

    Raises:
        LevelParseError: If the file cannot be read or a field is missing.
        LevelValidationError: If the geometry is invalid.

    File format:
        {"id": ..., "name": ...,
         "size": {"width", "height"},
         "start": {"x", "y", "radius"},
         "end": {"x", "y", "width", "height"},
         "walls": [{"x", "y", "width", "height"}, ...]}
    """
    filepath = Path(filepath)
    return parse_level(_read_json(filepath), default_id=filepath.stem)


def load_trace(filepath: str | Path) -> List[Point]:
    """Load recorded pointer samples.

    Accepts a JSON list of {"x", "y"} objects or [x, y] pairs.
    """
    filepath = Path(filepath)
    data = _read_json(filepath)
    if not isinstance(data, list):
        raise LevelParseError(f"Trace in {filepath} must be a JSON list")

    samples: List[Point] = []
    for i, item in enumerate(data):
        where = f"sample {i} of {filepath}"
        if isinstance(item, Mapping):
            samples.append(Point(_number(item, "x", where), _number(item, "y", where)))
        elif isinstance(item, list) and len(item) == 2:
            samples.append(Point(_as_float(item[0], where), _as_float(item[1], where)))
        else:
            raise LevelParseError(f"Invalid {where}: {item!r}")
    return samples
