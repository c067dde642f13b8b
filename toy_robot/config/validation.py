"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..state.models import HISTORY_LIMIT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_store_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate store parameters."""
        errors = []

        if "db_path" in params:
            value = params["db_path"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="store.db_path",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "history_limit" in params:
            value = params["history_limit"]
            if (not isinstance(value, int) or isinstance(value, bool)
                    or value <= 0 or value > HISTORY_LIMIT):
                errors.append(ValidationError(
                    field="store.history_limit",
                    message=f"Must be an integer between 1 and {HISTORY_LIMIT}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_server_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate server parameters."""
        errors = []

        if "host" in params:
            value = params["host"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="server.host",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "port" in params:
            value = params["port"]
            if (not isinstance(value, int) or isinstance(value, bool)
                    or not 1 <= value <= 65535):
                errors.append(ValidationError(
                    field="server.port",
                    message="Must be an integer between 1 and 65535",
                    value=value
                ))

        if "cors_origins" in params:
            value = params["cors_origins"]
            if (not isinstance(value, (list, tuple))
                    or not all(isinstance(origin, str) for origin in value)):
                errors.append(ValidationError(
                    field="server.cors_origins",
                    message="Must be a list of origin strings",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="logging.format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_client_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate client parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                errors.append(ValidationError(
                    field="client.base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if (not isinstance(value, (int, float)) or isinstance(value, bool)
                    or value <= 0):
                errors.append(ValidationError(
                    field="client.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration dictionary."""
        errors = []
        section_validators = {
            "store": cls.validate_store_params,
            "server": cls.validate_server_params,
            "logging": cls.validate_logging_params,
            "client": cls.validate_client_params,
        }

        for section, validate in section_validators.items():
            params = config.get(section, {})
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validate(params))

        return errors
