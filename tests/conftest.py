"""Pytest configuration and shared fixtures."""

import os
import shutil
import tempfile

import pytest

from toy_robot.engine import RobotCommandService
from toy_robot.persistence.robot_store import RobotStore
from toy_robot.state.models import Direction, Position, RobotState


@pytest.fixture
def db_path():
    """Path to a throwaway SQLite file."""
    temp_dir = tempfile.mkdtemp()
    yield os.path.join(temp_dir, "test_robot.db")
    shutil.rmtree(temp_dir)


@pytest.fixture
def store(db_path) -> RobotStore:
    """File-backed robot store."""
    return RobotStore(db_path)


@pytest.fixture
def service(store) -> RobotCommandService:
    """Command service over a fresh store."""
    return RobotCommandService(store)


@pytest.fixture
def centre_state() -> RobotState:
    """Robot placed at the centre of the table facing NORTH."""
    return RobotState(position=Position(2, 2), direction=Direction.NORTH, is_placed=True)
