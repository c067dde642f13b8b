"""Tests for grid rendering."""

from toy_robot.client.render import render_grid
from toy_robot.state.models import Direction, Position, RobotState


class TestRenderGrid:
    """Test render_grid."""

    def test_empty_table(self):
        """Test an unplaced robot draws an empty table."""
        lines = render_grid(RobotState.unplaced()).splitlines()

        assert len(lines) == 6
        assert lines[0] == "4 . . . . ."
        assert lines[4] == "0 . . . . ."
        assert lines[5] == "  0 1 2 3 4"

    def test_robot_glyphs(self):
        """Test each direction draws its arrow."""
        glyphs = {Direction.NORTH: "^", Direction.EAST: ">", Direction.SOUTH: "v", Direction.WEST: "<"}

        for direction, glyph in glyphs.items():
            state = RobotState(position=Position(0, 0), direction=direction, is_placed=True)
            assert render_grid(state).splitlines()[4] == f"0 {glyph} . . . ."

    def test_north_is_up(self):
        """Test y=4 is the top row."""
        state = RobotState(position=Position(3, 4), direction=Direction.NORTH, is_placed=True)

        assert render_grid(state).splitlines()[0] == "4 . . . ^ ."
