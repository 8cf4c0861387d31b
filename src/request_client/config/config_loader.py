"""
Configuration Loader
Builds ClientSettings from a JSON file, REQUEST_CLIENT_* environment
variables and programmatic overrides
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from request_client.config.client_settings import (
    ClientSettings,
    ConfigDefaults,
    ENV_VAR_MAPPING,
)
from request_client.config.config_validator import ConfigValidator
from request_client.exceptions import ConfigError


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _parse_timeout(value: str) -> Union[int, str]:
    # Left as text when not an integer so the validator can report it
    try:
        return int(value)
    except ValueError:
        return value


def _parse_languages(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


# Settings keys whose environment text is not used verbatim
_ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
    "verify_ssl": _parse_bool,
    "enable_audit_log": _parse_bool,
    "timeout": _parse_timeout,
    "accept_language": _parse_languages,
}


class ConfigLoader:
    """
    ConfigLoader class
    Sources are merged in order, later ones winning; the result is
    validated as a whole before ClientSettings is built
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read settings from a JSON object file

        Raises:
            ConfigError: CONFIG_FILE_NOT_FOUND when the file is missing,
                CONFIG_PARSE_ERROR when it is not a JSON object
        """
        file_path = Path(path).resolve()

        if not file_path.is_file():
            raise ConfigError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND"
            )

        try:
            config = json.loads(file_path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ConfigError(
                f"Configuration file is not valid JSON: {file_path}",
                code="CONFIG_PARSE_ERROR"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must hold a JSON object, got {type(config).__name__}: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )
        return config

    def from_environment(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """
        Read settings from REQUEST_CLIENT_* variables; empty ones are ignored

        Args:
            environ: Variables to read, os.environ when omitted
        """
        environ = os.environ if environ is None else environ

        return {
            key: _ENV_PARSERS.get(key, str)(environ[name])
            for name, key in ENV_VAR_MAPPING.items()
            if environ.get(name)
        }

    def from_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of a configuration dictionary"""
        return config.copy()

    def merge(self, *sources: Dict[str, Any]) -> Dict[str, Any]:
        """Combine sources left to right; None values never override"""
        return {
            key: value
            for source in sources
            for key, value in source.items()
            if value is not None
        }

    def resolve(self, config: Dict[str, Any]) -> ClientSettings:
        """
        Validate a merged configuration and build settings from it

        Raises:
            ValidationError: If configuration is invalid
        """
        self._validator.validate_or_raise(config)
        return ClientSettings(**config)

    def load(
        self,
        file: Optional[Union[str, Path]] = None,
        env: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> ClientSettings:
        """
        Load settings with priority: config > environment > file

        Args:
            file: Path to JSON configuration file (optional)
            env: Whether to read REQUEST_CLIENT_* variables (default: True)
            config: Programmatic overrides (optional)

        Returns:
            Validated ClientSettings
        """
        sources = [
            self.from_file(file) if file is not None else {},
            self.from_environment() if env else {},
            config or {},
        ]
        return self.resolve(self.merge(*sources))

    def create_template(self, path: Union[str, Path]) -> None:
        """Write a JSON file with every setting at its default value"""
        template = {
            "base_uri": "https://api.example.com/",
            "media_type": ConfigDefaults.MEDIA_TYPE.value,
            "encoding": ConfigDefaults.ENCODING,
            "timeout": ConfigDefaults.TIMEOUT,
            "accept_language": list(ConfigDefaults.ACCEPT_LANGUAGE),
            "headers": {},
            "authorization": "",
            "verify_ssl": ConfigDefaults.VERIFY_SSL,
            "enable_audit_log": ConfigDefaults.ENABLE_AUDIT_LOG,
        }

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(json.dumps(template, indent=2), encoding="utf-8")
