"""Interactive text console driving a running robot service."""

from typing import Callable, Optional

import structlog

from ..errors import ClientTransportError
from ..state.models import RobotState
from .http_client import OperationResult, RobotClient
from .render import render_grid

logger = structlog.get_logger(__name__)

HELP_TEXT = """Commands:
  place X Y DIR   put the robot at (X, Y) facing NORTH/SOUTH/EAST/WEST
  move            move one cell forward
  left | right    turn 90 degrees
  report          print X,Y,DIRECTION
  history         list the most recent actions
  help            show this text
  quit            leave the console"""

QUIT_COMMANDS = ("quit", "exit", "q")


class RobotConsole:
    """Reads text commands, forwards them to the API and redraws the table."""

    def __init__(self, client: RobotClient,
                 output: Callable[[str], None] = print):
        self.client = client
        self.output = output
        self.state = RobotState.unplaced()

    def refresh(self) -> None:
        """Load the current state from the service and draw it."""
        result = self.client.get_current_state()
        self._show(result, "")

    def handle_line(self, line: str) -> bool:
        """
        Execute one console line.

        Returns:
            False when the console should stop, True otherwise
        """
        parts = line.strip().split()
        if not parts:
            return True

        verb, args = parts[0].lower(), parts[1:]

        if verb in QUIT_COMMANDS:
            return False
        if verb == "help":
            self.output(HELP_TEXT)
            return True

        try:
            self._dispatch(verb, args)
        except ClientTransportError as e:
            logger.error("Console request failed", command=verb, error=str(e))
            self.output(f"Service unavailable: {e}")

        return True

    def run(self, read_line: Callable[[str], str] = input) -> None:
        """Loop until quit or end of input."""
        self.output(HELP_TEXT)
        try:
            self.refresh()
        except ClientTransportError as e:
            self.output(f"Service unavailable: {e}")

        while True:
            try:
                line = read_line("robot> ")
            except EOFError:
                break
            if not self.handle_line(line):
                break

    def _dispatch(self, verb: str, args: list[str]) -> None:
        if verb == "place":
            place_args = self._parse_place(args)
            if place_args is None:
                self.output("Usage: place X Y DIRECTION")
                return
            x, y, direction = place_args
            self._show(self.client.place(x, y, direction), f"Robot placed at ({x}, {y})")
        elif verb == "move":
            self._show(self.client.move(), "Robot moved")
        elif verb == "left":
            self._show(self.client.turn_left(), "Robot turned left")
        elif verb == "right":
            self._show(self.client.turn_right(), "Robot turned right")
        elif verb == "report":
            result = self.client.get_report()
            if result.success:
                self.output(f"REPORT: {result.data}")
            else:
                self.output(result.error or "Failed to get robot report")
        elif verb == "history":
            result = self.client.get_history()
            if not result.success:
                self.output(result.error or "Failed to get robot history")
                return
            if not result.data:
                self.output("No actions recorded yet.")
            for item in result.data or []:
                self.output(
                    f"{item['timestamp']}  {item['action']:<5}  "
                    f"{item['x']},{item['y']},{item['direction']}"
                )
        else:
            self.output(f"Unknown command: {verb}. Type 'help' for a list.")

    @staticmethod
    def _parse_place(args: list[str]) -> Optional[tuple[int, int, str]]:
        # Accept both "place 1 2 north" and "place 1,2,NORTH"
        tokens = [token for arg in args for token in arg.split(",") if token]
        if len(tokens) != 3:
            return None
        try:
            return int(tokens[0]), int(tokens[1]), tokens[2].upper()
        except ValueError:
            return None

    def _show(self, result: OperationResult, success_message: str) -> None:
        state = result.state
        if state is not None:
            self.state = state

        self.output(render_grid(self.state))
        if result.success:
            if success_message:
                self.output(success_message)
        else:
            self.output(result.error or "Operation failed")
