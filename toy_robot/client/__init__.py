"""HTTP client and text console for a running toy robot service."""

from .http_client import OperationResult, RobotClient
from .render import render_grid

__all__ = ["OperationResult", "RobotClient", "render_grid"]
