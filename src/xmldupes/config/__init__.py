"""Configuration management for xmldupes."""

from xmldupes.config.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from xmldupes.config.models import XmlDupesConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "XmlDupesConfig",
]
