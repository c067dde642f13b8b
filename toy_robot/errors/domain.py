"""
Domain error classifications for robot commands.

These exceptions represent commands that break the table rules. They never
corrupt state: the robot simply stays where it was.
"""

from typing import Any, Dict, Optional


class RobotDomainError(Exception):
    """Base class for rejected robot commands."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = True


class InvalidPosition(RobotDomainError):
    """PLACE target is off the table or not an integer coordinate."""

    def __init__(self, x: Any, y: Any, max_coordinate: int = 4, **kwargs):
        super().__init__(
            f"Invalid position: ({x}, {y}). Must be within 0-{max_coordinate}.",
            **kwargs
        )
        self.x = x
        self.y = y


class InvalidDirection(RobotDomainError):
    """PLACE direction is not one of the four compass points."""

    def __init__(self, value: Any, **kwargs):
        super().__init__(
            f"Invalid direction: {value!r}. Must be one of NORTH, SOUTH, EAST, WEST.",
            **kwargs
        )
        self.value = value


class NotPlaced(RobotDomainError):
    """Command issued before the robot was placed on the table."""

    def __init__(self, command: str, **kwargs):
        verb = {
            "MOVE": "moving",
            "LEFT": "turning",
            "RIGHT": "turning",
            "REPORT": "reporting",
        }.get(command.upper(), "executing commands")
        super().__init__(
            f"Robot must be placed on the table before {verb}.",
            **kwargs
        )
        self.command = command.upper()


class WouldFallOff(RobotDomainError):
    """MOVE would take the robot off the table."""

    def __init__(self, position: Optional[tuple] = None,
                 direction: Optional[str] = None, **kwargs):
        super().__init__("Move would cause robot to fall off table.", **kwargs)
        self.position = position
        self.direction = direction
