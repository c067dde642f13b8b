"""Persistence layer for robot snapshots and action history."""

from .robot_store import RobotStore

__all__ = ["RobotStore"]
