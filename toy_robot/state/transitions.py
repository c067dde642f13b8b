"""
Pure state transition functions for the toy robot.

Every function here takes a RobotState and either returns a new RobotState
or raises a RobotDomainError. Nothing is persisted and nothing is logged;
the command service wraps these with storage and audit logging.
"""

from typing import Any, Optional, Union

from ..errors import InvalidDirection, InvalidPosition, NotPlaced, WouldFallOff
from .models import (
    MAX_COORDINATE,
    MIN_COORDINATE,
    Action,
    Command,
    Direction,
    Position,
    RobotState,
)

# Unit step for one MOVE in each direction
DIRECTION_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (0, 1),
    Direction.SOUTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

LEFT_TURNS: dict[Direction, Direction] = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}

RIGHT_TURNS: dict[Direction, Direction] = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}


def _is_integer(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, int) and not isinstance(value, bool)


def validate_position(x: Any, y: Any) -> bool:
    """Check that (x, y) are integer coordinates on the table."""
    return (
        _is_integer(x)
        and _is_integer(y)
        and MIN_COORDINATE <= x <= MAX_COORDINATE
        and MIN_COORDINATE <= y <= MAX_COORDINATE
    )


def place(x: Any, y: Any, direction: Union[Direction, str]) -> RobotState:
    """
    Place the robot on the table.

    Args:
        x, y: Target cell coordinates
        direction: Facing direction, enum member or case-insensitive name

    Returns:
        New placed RobotState

    Raises:
        InvalidPosition: Target is off the table or not integer
        InvalidDirection: Direction is not a compass point
    """
    if not validate_position(x, y):
        raise InvalidPosition(x, y, max_coordinate=MAX_COORDINATE)

    try:
        facing = Direction.parse(direction)
    except ValueError:
        raise InvalidDirection(direction) from None

    return RobotState(position=Position(x, y), direction=facing, is_placed=True)


def next_position(current: RobotState) -> Optional[Position]:
    """Position one step ahead, or None if unplaced or off the table."""
    if not current.is_placed or current.position is None:
        return None

    dx, dy = DIRECTION_DELTAS[current.direction]
    candidate = current.position.offset(dx, dy)

    if not validate_position(candidate.x, candidate.y):
        return None
    return candidate


def move(current: RobotState) -> RobotState:
    """
    Move the robot one cell forward.

    Raises:
        NotPlaced: Robot has not been placed yet
        WouldFallOff: The step would leave the table; the robot stays put
    """
    if not current.is_placed:
        raise NotPlaced(Command.MOVE.value)

    candidate = next_position(current)
    if candidate is None:
        raise WouldFallOff(
            position=(current.position.x, current.position.y),
            direction=current.direction.value,
        )

    return current.with_position(candidate)


def turn_left(current: RobotState) -> RobotState:
    """Rotate 90 degrees counter-clockwise without moving."""
    if not current.is_placed:
        raise NotPlaced(Command.LEFT.value)
    return current.with_direction(LEFT_TURNS[current.direction])


def turn_right(current: RobotState) -> RobotState:
    """Rotate 90 degrees clockwise without moving."""
    if not current.is_placed:
        raise NotPlaced(Command.RIGHT.value)
    return current.with_direction(RIGHT_TURNS[current.direction])


def report(current: RobotState) -> str:
    """Format the robot as "x,y,DIRECTION"."""
    if not current.is_placed or current.position is None:
        raise NotPlaced(Command.REPORT.value)
    return f"{current.position.x},{current.position.y},{current.direction.value}"


def validate_command(
    command: str,
    x: Any = None,
    y: Any = None,
    current: Optional[RobotState] = None,
) -> bool:
    """
    Dry-run check whether a command would be accepted.

    Args:
        command: Command name, case-insensitive
        x, y: Coordinates, only used for PLACE
        current: State the command would run against

    Returns:
        True if the command would succeed from the given state
    """
    state = current or RobotState.unplaced()

    name = command.value if isinstance(command, Command) else str(command)
    try:
        parsed = Command(name.strip().upper())
    except ValueError:
        return False

    if parsed is Command.PLACE:
        return x is not None and y is not None and validate_position(x, y)
    if parsed is Command.MOVE:
        return state.is_placed and next_position(state) is not None
    return state.is_placed


def apply_action(
    current: RobotState,
    action: Action,
    x: Any = None,
    y: Any = None,
    direction: Union[Direction, str, None] = None,
) -> RobotState:
    """Dispatch a mutating action to its transition function."""
    if action is Action.PLACE:
        return place(x, y, direction if direction is not None else Direction.NORTH)
    if action is Action.MOVE:
        return move(current)
    if action is Action.LEFT:
        return turn_left(current)
    return turn_right(current)
