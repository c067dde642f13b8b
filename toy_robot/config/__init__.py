"""Layered configuration: dataclass defaults, YAML file, explicit overrides."""

from .defaults import AppConfig, get_default_config
from .loader import ConfigLoader

__all__ = ["AppConfig", "ConfigLoader", "get_default_config"]
