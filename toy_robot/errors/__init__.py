"""
Error classification for the toy robot service.

Domain errors describe commands the robot refuses to execute and are
reported back to the caller together with the last known state.
Infrastructure errors describe persistence or transport failures unrelated
to the robot rules.
"""

from .domain import (
    RobotDomainError,
    InvalidPosition,
    InvalidDirection,
    NotPlaced,
    WouldFallOff,
)
from .system_failures import (
    InfrastructureError,
    PersistenceError,
    ClientTransportError,
    ConfigurationError,
)

__all__ = [
    # Domain Errors
    "RobotDomainError",
    "InvalidPosition",
    "InvalidDirection",
    "NotPlaced",
    "WouldFallOff",
    # Infrastructure Failures
    "InfrastructureError",
    "PersistenceError",
    "ClientTransportError",
    "ConfigurationError",
]
