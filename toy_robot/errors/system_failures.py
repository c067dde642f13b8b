"""
Infrastructure failure classifications.

These exceptions represent failures outside the robot rules: the database,
the network, or the configuration. They are surfaced as hard failures and
never retried automatically.
"""

from typing import Any, Dict, Optional


class InfrastructureError(Exception):
    """Base class for persistence and transport failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(InfrastructureError):
    """Database read or write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class ClientTransportError(InfrastructureError):
    """HTTP client could not reach the service or decode its reply."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.url = url
        self.status_code = status_code


class ConfigurationError(Exception):
    """Configuration file or values failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []
