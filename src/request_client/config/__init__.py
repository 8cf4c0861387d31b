"""
Configuration module
"""

from request_client.config.client_settings import (
    ClientSettings,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from request_client.config.config_loader import ConfigLoader
from request_client.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "ClientSettings",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
