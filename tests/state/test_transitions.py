"""Tests for pure robot state transitions."""

import pytest

from toy_robot.errors import InvalidDirection, InvalidPosition, NotPlaced, WouldFallOff
from toy_robot.state.models import Action, Direction, Position, RobotState
from toy_robot.state.transitions import (
    LEFT_TURNS,
    RIGHT_TURNS,
    apply_action,
    move,
    next_position,
    place,
    report,
    turn_left,
    turn_right,
    validate_command,
    validate_position,
)

ALL_CELLS = [(x, y) for x in range(5) for y in range(5)]


def placed(x: int, y: int, direction: Direction) -> RobotState:
    return RobotState(position=Position(x, y), direction=direction, is_placed=True)


class TestValidatePosition:
    """Test bounds checking."""

    @pytest.mark.parametrize("x,y", ALL_CELLS)
    def test_every_cell_is_valid(self, x, y):
        """Test every cell of the 5x5 table is accepted."""
        assert validate_position(x, y) is True

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 5), (5, 5), (-3, 7)])
    def test_out_of_bounds(self, x, y):
        """Test coordinates outside 0-4 are rejected."""
        assert validate_position(x, y) is False

    @pytest.mark.parametrize("x,y", [(1.5, 2), (2, 2.0), ("1", 2), (None, 1), (True, 0)])
    def test_non_integer(self, x, y):
        """Test floats, strings, None and booleans are rejected, never rounded."""
        assert validate_position(x, y) is False


class TestPlace:
    """Test PLACE."""

    @pytest.mark.parametrize("x,y", ALL_CELLS)
    def test_place_anywhere_on_table(self, x, y):
        """Test placing on any cell yields a placed robot at that cell."""
        state = place(x, y, Direction.EAST)

        assert state.is_placed is True
        assert state.position == Position(x, y)
        assert state.direction == Direction.EAST

    @pytest.mark.parametrize("x,y", [(5, 3), (-1, 0), (0, 10), (2.5, 1), ("2", "3")])
    def test_place_invalid_position(self, x, y):
        """Test placing off the table or with non-integers fails."""
        with pytest.raises(InvalidPosition) as exc_info:
            place(x, y, Direction.NORTH)

        assert exc_info.value.x == x
        assert exc_info.value.y == y
        assert "Invalid position" in str(exc_info.value)

    def test_place_direction_by_name(self):
        """Test direction names are accepted case-insensitively."""
        assert place(0, 0, "south").direction == Direction.SOUTH

    def test_place_invalid_direction(self):
        """Test unknown direction names are rejected."""
        with pytest.raises(InvalidDirection):
            place(0, 0, "UPWARDS")

    def test_place_replaces_previous_state(self):
        """Test PLACE does not depend on the previous state."""
        state = apply_action(placed(4, 4, Direction.WEST), Action.PLACE, x=1, y=1, direction="NORTH")

        assert state == placed(1, 1, Direction.NORTH)


class TestMove:
    """Test MOVE."""

    def test_move_unplaced(self):
        """Test moving an unplaced robot fails."""
        with pytest.raises(NotPlaced) as exc_info:
            move(RobotState.unplaced())

        assert exc_info.value.command == "MOVE"

    @pytest.mark.parametrize("direction,expected", [
        (Direction.NORTH, Position(2, 3)),
        (Direction.SOUTH, Position(2, 1)),
        (Direction.EAST, Position(3, 2)),
        (Direction.WEST, Position(1, 2)),
    ])
    def test_move_one_step(self, direction, expected):
        """Test each direction moves exactly one cell."""
        state = move(placed(2, 2, direction))

        assert state.position == expected
        assert state.direction == direction

    def test_move_off_south_west_corner(self):
        """Test moving SOUTH from the origin is rejected and leaves state alone."""
        start = placed(0, 0, Direction.SOUTH)

        with pytest.raises(WouldFallOff):
            move(start)

        assert start == placed(0, 0, Direction.SOUTH)

    def test_repeated_rejection_is_idempotent(self):
        """Test a rejected move can be retried without side effects."""
        start = placed(0, 0, Direction.WEST)

        for _ in range(3):
            with pytest.raises(WouldFallOff):
                move(start)

        assert start.position == Position(0, 0)

    def test_move_north_sequence(self, centre_state):
        """Test two moves from (2,2) NORTH reach the top edge and a third fails."""
        state = move(centre_state)
        assert state.position == Position(2, 3)

        state = move(state)
        assert state.position == Position(2, 4)

        with pytest.raises(WouldFallOff) as exc_info:
            move(state)

        assert exc_info.value.position == (2, 4)
        assert exc_info.value.direction == "NORTH"

    @pytest.mark.parametrize("x,y,direction", [
        (4, 2, Direction.EAST),
        (0, 2, Direction.WEST),
        (2, 4, Direction.NORTH),
        (2, 0, Direction.SOUTH),
    ])
    def test_every_edge_is_guarded(self, x, y, direction):
        """Test each edge of the table stops the robot."""
        with pytest.raises(WouldFallOff):
            move(placed(x, y, direction))


class TestTurns:
    """Test LEFT and RIGHT."""

    def test_turn_unplaced(self):
        """Test turning an unplaced robot fails."""
        with pytest.raises(NotPlaced):
            turn_left(RobotState.unplaced())
        with pytest.raises(NotPlaced):
            turn_right(RobotState.unplaced())

    def test_left_cycle(self):
        """Test left turns go NORTH, WEST, SOUTH, EAST."""
        state = placed(1, 1, Direction.NORTH)
        seen = []
        for _ in range(4):
            state = turn_left(state)
            seen.append(state.direction)

        assert seen == [Direction.WEST, Direction.SOUTH, Direction.EAST, Direction.NORTH]

    def test_right_cycle(self):
        """Test right turns go NORTH, EAST, SOUTH, WEST."""
        state = placed(1, 1, Direction.NORTH)
        seen = []
        for _ in range(4):
            state = turn_right(state)
            seen.append(state.direction)

        assert seen == [Direction.EAST, Direction.SOUTH, Direction.WEST, Direction.NORTH]

    @pytest.mark.parametrize("direction", list(Direction))
    def test_four_turns_restore_direction(self, direction):
        """Test four turns either way return to the starting direction."""
        start = placed(3, 1, direction)

        assert turn_left(turn_left(turn_left(turn_left(start)))) == start
        assert turn_right(turn_right(turn_right(turn_right(start)))) == start

    @pytest.mark.parametrize("direction", list(Direction))
    def test_left_and_right_are_inverse(self, direction):
        """Test the two turn tables undo each other."""
        assert RIGHT_TURNS[LEFT_TURNS[direction]] == direction

    def test_turn_keeps_position(self):
        """Test turning never moves the robot."""
        state = turn_right(placed(4, 0, Direction.SOUTH))

        assert state.position == Position(4, 0)


class TestReport:
    """Test REPORT."""

    def test_report_format(self):
        """Test report is "x,y,DIRECTION"."""
        assert report(placed(2, 3, Direction.NORTH)) == "2,3,NORTH"

    def test_report_unplaced(self):
        """Test reporting an unplaced robot fails."""
        with pytest.raises(NotPlaced) as exc_info:
            report(RobotState.unplaced())

        assert exc_info.value.command == "REPORT"


class TestValidateCommand:
    """Test dry-run validation."""

    def test_place_out_of_bounds(self):
        """Test PLACE 5,3 is invalid."""
        assert validate_command("PLACE", 5, 3, RobotState.unplaced()) is False

    def test_place_valid(self):
        """Test PLACE on the table is valid from any state."""
        assert validate_command("PLACE", 0, 4, RobotState.unplaced()) is True

    def test_place_missing_coordinates(self):
        """Test PLACE without coordinates is invalid."""
        assert validate_command("PLACE", None, 3, RobotState.unplaced()) is False
        assert validate_command("PLACE", 3, None, RobotState.unplaced()) is False

    def test_move_matches_bounds(self, centre_state):
        """Test MOVE validity follows whether the implied step stays on the table."""
        assert validate_command("MOVE", current=centre_state) is True
        assert validate_command("MOVE", current=placed(2, 4, Direction.NORTH)) is False

    @pytest.mark.parametrize("command", ["MOVE", "LEFT", "RIGHT", "REPORT"])
    def test_commands_need_placement(self, command):
        """Test non-PLACE commands are invalid before PLACE."""
        assert validate_command(command, current=RobotState.unplaced()) is False

    @pytest.mark.parametrize("command", ["left", "Right", "report"])
    def test_case_insensitive(self, command, centre_state):
        """Test command names are case-insensitive."""
        assert validate_command(command, current=centre_state) is True

    def test_unknown_command(self, centre_state):
        """Test unrecognized commands are invalid."""
        assert validate_command("JUMP", current=centre_state) is False
        assert validate_command("", current=centre_state) is False

    def test_validation_does_not_mutate(self, centre_state):
        """Test validation leaves the given state untouched."""
        validate_command("MOVE", current=centre_state)

        assert centre_state.position == Position(2, 2)


class TestNextPosition:
    """Test the dry-run step helper."""

    def test_unplaced(self):
        assert next_position(RobotState.unplaced()) is None

    def test_off_table(self):
        assert next_position(placed(0, 0, Direction.WEST)) is None

    def test_on_table(self):
        assert next_position(placed(0, 0, Direction.EAST)) == Position(1, 0)
