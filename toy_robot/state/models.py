"""
Robot state data models.

This module defines immutable data structures for the robot position,
facing direction, and the history entries recorded for accepted actions.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional


# Table geometry
TABLE_SIZE = 5
MIN_COORDINATE = 0
MAX_COORDINATE = TABLE_SIZE - 1

# Most recent history rows returned to callers
HISTORY_LIMIT = 50


class Direction(str, Enum):
    """Compass direction the robot is facing."""
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"

    @classmethod
    def parse(cls, value: Any) -> "Direction":
        """Parse a direction from an enum member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls(value.strip().upper())
        raise ValueError(f"Not a direction: {value!r}")


class Action(str, Enum):
    """Mutating commands recorded in the history log."""
    PLACE = "PLACE"
    MOVE = "MOVE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class Command(str, Enum):
    """Every command the robot understands."""
    PLACE = "PLACE"
    MOVE = "MOVE"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    REPORT = "REPORT"


@dataclass(frozen=True)
class Position:
    """Grid cell coordinates."""
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class RobotState:
    """Snapshot of the robot at a point in time."""

    position: Optional[Position] = None
    direction: Direction = Direction.NORTH
    is_placed: bool = False

    def __post_init__(self) -> None:
        if self.is_placed and self.position is None:
            raise ValueError("Placed robot must have a position")
        if self.is_placed and not (
            MIN_COORDINATE <= self.position.x <= MAX_COORDINATE
            and MIN_COORDINATE <= self.position.y <= MAX_COORDINATE
        ):
            raise ValueError(f"Placed robot must be on the table, got {self.position}")
        if not self.is_placed and self.position is not None:
            raise ValueError("Unplaced robot cannot have a position")

    @classmethod
    def unplaced(cls) -> "RobotState":
        """Default state before the first PLACE."""
        return cls()

    def with_position(self, position: Position) -> "RobotState":
        return replace(self, position=position)

    def with_direction(self, direction: Direction) -> "RobotState":
        return replace(self, direction=direction)

    def to_dict(self) -> dict[str, Any]:
        """JSON form used by the HTTP API."""
        return {
            "position": self.position.to_dict() if self.position else None,
            "direction": self.direction.value,
            "isPlaced": self.is_placed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RobotState":
        position = data.get("position")
        return cls(
            position=Position(int(position["x"]), int(position["y"])) if position else None,
            direction=Direction.parse(data.get("direction") or Direction.NORTH),
            is_placed=bool(data.get("isPlaced", False)),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One accepted action, as recorded in the audit log."""

    position: Position
    direction: Direction
    action: Action
    recorded_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.position.x,
            "y": self.position.y,
            "direction": self.direction.value,
            "action": self.action.value,
            "timestamp": self.recorded_at.isoformat(),
        }


@dataclass(frozen=True)
class StoredSnapshot:
    """Persisted robot state with row metadata."""
    id: int
    state: RobotState
    created_at: str
