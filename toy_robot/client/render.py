"""Text rendering of the 5x5 table."""

from ..state.models import (
    MAX_COORDINATE,
    MIN_COORDINATE,
    Direction,
    Position,
    RobotState,
)

ROBOT_GLYPHS = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "v",
    Direction.WEST: "<",
}

EMPTY_CELL = "."


def render_grid(state: RobotState) -> str:
    """
    Draw the table with the robot as an arrow.

    Row y=4 is printed first so NORTH points up the screen, matching the
    way the table is drawn in the browser frontend.
    """
    coordinates = range(MIN_COORDINATE, MAX_COORDINATE + 1)
    lines = []

    for y in reversed(coordinates):
        cells = []
        for x in coordinates:
            if state.is_placed and state.position == Position(x, y):
                cells.append(ROBOT_GLYPHS[state.direction])
            else:
                cells.append(EMPTY_CELL)
        lines.append(f"{y} " + " ".join(cells))

    lines.append("  " + " ".join(str(x) for x in coordinates))
    return "\n".join(lines)
