"""
Robot command service.

Coordinates the command pipeline for the single robot:
Store (current state) → State Engine (next state) → Store (snapshot + history).
"""

import threading
from typing import Any, Optional, Union

from .errors import RobotDomainError
from .logging.config import get_state_logger, log_command_rejected, log_state_transition
from .persistence.robot_store import RobotStore
from .state import transitions
from .state.models import (
    HISTORY_LIMIT,
    Action,
    Direction,
    HistoryEntry,
    RobotState,
)
from .utils.time import utc_now

state_logger = get_state_logger(__name__)


class RobotCommandService:
    """
    Executes robot commands against the persisted state.

    Mutating commands hold a single-writer lock for the whole
    read-current → compute → persist sequence, so two concurrent commands
    never start from the same snapshot within one process.
    """

    def __init__(self, store: RobotStore, history_limit: int = HISTORY_LIMIT) -> None:
        self.store = store
        self.history_limit = history_limit
        self._write_lock = threading.Lock()

    def current_state(self) -> RobotState:
        """Latest persisted state, or the unplaced default."""
        return self.store.get_latest()

    def place(self, x: Any, y: Any, direction: Union[Direction, str]) -> RobotState:
        """Place the robot at (x, y) facing direction."""
        return self._execute(Action.PLACE, x=x, y=y, direction=direction)

    def move(self) -> RobotState:
        """Move the robot one cell forward."""
        return self._execute(Action.MOVE)

    def turn_left(self) -> RobotState:
        return self._execute(Action.LEFT)

    def turn_right(self) -> RobotState:
        return self._execute(Action.RIGHT)

    def report(self) -> str:
        """Report the robot as "x,y,DIRECTION"."""
        return transitions.report(self.current_state())

    def history(self, limit: Optional[int] = None) -> list[HistoryEntry]:
        """Most recent accepted actions, newest first."""
        if limit is None or limit > self.history_limit:
            limit = self.history_limit
        return self.store.list_history(limit)

    def validate_command(self, command: str, x: Any = None, y: Any = None) -> bool:
        """Check whether a command would be accepted from the current state."""
        return transitions.validate_command(command, x, y, self.current_state())

    def _execute(
        self,
        action: Action,
        x: Any = None,
        y: Any = None,
        direction: Union[Direction, str, None] = None,
    ) -> RobotState:
        """Run one mutating command and persist the outcome."""
        with self._write_lock:
            current = self.store.get_latest()

            try:
                new_state = transitions.apply_action(current, action, x=x, y=y, direction=direction)
            except RobotDomainError as e:
                log_command_rejected(
                    state_logger,
                    command=action.value,
                    reason=e.message,
                    state=current.to_dict(),
                    context=e.context or None,
                )
                raise

            entry = HistoryEntry(
                position=new_state.position,
                direction=new_state.direction,
                action=action,
                recorded_at=utc_now(),
            )
            self.store.record_transition(new_state, entry)

        log_state_transition(
            state_logger,
            command=action.value,
            from_state=current.to_dict(),
            to_state=new_state.to_dict(),
        )
        return new_state
