"""Unit tests for the robot command service."""

import threading
import pytest
from unittest.mock import Mock, patch

from toy_robot.engine import RobotCommandService
from toy_robot.errors import (
    InvalidPosition,
    NotPlaced,
    PersistenceError,
    WouldFallOff,
)
from toy_robot.persistence.robot_store import RobotStore
from toy_robot.state.models import Action, Direction, Position, RobotState


class TestRobotCommandService:
    """Test command execution and persistence."""

    def test_initial_state(self, service):
        """Test a fresh service reports the unplaced default."""
        assert service.current_state() == RobotState.unplaced()

    def test_place_persists_snapshot_and_history(self, service, store):
        """Test PLACE writes one snapshot and one history row."""
        state = service.place(1, 2, Direction.EAST)

        assert state == RobotState(position=Position(1, 2), direction=Direction.EAST, is_placed=True)
        assert store.get_latest() == state

        history = store.list_history()
        assert len(history) == 1
        assert history[0].action == Action.PLACE
        assert history[0].position == Position(1, 2)
        assert history[0].direction == Direction.EAST

    def test_place_then_move_then_report(self, service):
        """Test PLACE 1,2,EAST -> MOVE -> REPORT gives 2,2,EAST."""
        service.place(1, 2, "EAST")
        service.move()

        assert service.report() == "2,2,EAST"

    def test_rejected_move_leaves_state(self, service, store):
        """Test PLACE 0,0,SOUTH -> MOVE is rejected and REPORT gives 0,0,SOUTH."""
        service.place(0, 0, "SOUTH")

        with pytest.raises(WouldFallOff):
            service.move()

        assert service.report() == "0,0,SOUTH"
        assert store.count_snapshots() == 1
        assert len(store.list_history()) == 1

    def test_failed_place_writes_nothing(self, service, store):
        """Test rejected PLACE produces neither snapshot nor history."""
        with pytest.raises(InvalidPosition):
            service.place(5, 3, "NORTH")

        assert store.count_snapshots() == 0
        assert store.list_history() == []

    def test_commands_before_place(self, service):
        """Test MOVE, LEFT, RIGHT and REPORT fail before PLACE."""
        with pytest.raises(NotPlaced):
            service.move()
        with pytest.raises(NotPlaced):
            service.turn_left()
        with pytest.raises(NotPlaced):
            service.turn_right()
        with pytest.raises(NotPlaced):
            service.report()

    def test_turn_history_records_new_direction(self, service):
        """Test turn history rows carry the direction after the turn."""
        service.place(3, 3, "NORTH")
        service.turn_left()
        service.turn_right()
        service.turn_right()

        history = service.history()
        assert [entry.action for entry in history] == [Action.RIGHT, Action.RIGHT, Action.LEFT, Action.PLACE]
        assert [entry.direction for entry in history] == [
            Direction.EAST, Direction.NORTH, Direction.WEST, Direction.NORTH
        ]
        assert all(entry.position == Position(3, 3) for entry in history)

    def test_each_command_appends_snapshot(self, service, store):
        """Test the store grows by one snapshot per accepted command."""
        service.place(0, 0, "NORTH")
        service.move()
        service.turn_right()
        service.move()

        assert store.count_snapshots() == 4
        assert service.report() == "1,1,EAST"

    def test_history_limit(self, store):
        """Test the service caps history reads."""
        service = RobotCommandService(store, history_limit=3)
        service.place(0, 0, "NORTH")
        for _ in range(4):
            service.turn_left()

        assert len(service.history()) == 3
        assert len(service.history(limit=100)) == 3
        assert len(service.history(limit=2)) == 2

    def test_validate_command_uses_current_state(self, service):
        """Test validation reads the persisted state."""
        assert service.validate_command("MOVE") is False

        service.place(2, 4, "NORTH")

        assert service.validate_command("MOVE") is False
        assert service.validate_command("LEFT") is True
        assert service.validate_command("PLACE", 5, 3) is False
        assert service.validate_command("PLACE", 4, 0) is True

    def test_persistence_failure_propagates(self, service, store):
        """Test store failures surface unchanged and are not retried."""
        service.place(1, 1, "NORTH")

        with patch.object(store, "record_transition",
                          side_effect=PersistenceError("disk full", operation="record_transition")) as mock_record:
            with pytest.raises(PersistenceError):
                service.move()

        assert mock_record.call_count == 1
        assert service.report() == "1,1,NORTH"

    def test_read_failure_propagates(self):
        """Test a failing current-state read is not turned into a domain error."""
        store = Mock(spec=RobotStore)
        store.get_latest.side_effect = PersistenceError("unreadable", operation="get_latest")
        service = RobotCommandService(store)

        with pytest.raises(PersistenceError):
            service.move()
        store.record_transition.assert_not_called()


class TestRobotCommandServiceConcurrency:
    """Test the single-writer serialization point."""

    def test_concurrent_moves_are_not_lost(self, store):
        """Test four concurrent MOVEs from (0,0) NORTH all land."""
        service = RobotCommandService(store)
        service.place(0, 0, "NORTH")

        barrier = threading.Barrier(4)
        errors = []

        def worker():
            barrier.wait()
            try:
                service.move()
            except Exception as e:  # collected for the assertion below
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert service.report() == "0,4,NORTH"
        assert store.count_snapshots() == 5
        assert len(service.history()) == 5

    def test_concurrent_moves_past_edge(self, store):
        """Test only the moves that fit on the table are accepted."""
        service = RobotCommandService(store)
        service.place(0, 2, "NORTH")

        results = []
        lock = threading.Lock()

        def worker():
            try:
                service.move()
                outcome = "moved"
            except WouldFallOff:
                outcome = "rejected"
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count("moved") == 2
        assert results.count("rejected") == 3
        assert service.report() == "0,4,NORTH"
