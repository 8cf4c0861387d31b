"""
Configuration Validator
Validates request client configuration with clear error messages
"""

import codecs
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from request_client.exceptions import RequestClientError
from request_client.models.media_type import MediaType
from request_client.utils.uri import parse_absolute_uri


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Collects every problem in a configuration dictionary instead of
    stopping at the first one
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_base_uri(config)
        self._validate_media_type(config)
        self._validate_encoding(config)
        self._validate_timeout(config)
        self._validate_headers(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Raises:
            ValidationError: If configuration is invalid
        """
        from request_client.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
                details={"errors": [e.field for e in result.errors]},
            )

    def _add(self, field_name: str, message: str, value: Any = None) -> None:
        self._errors.append(ValidationErrorDetail(
            field=field_name,
            message=message,
            value=value
        ))

    def _validate_base_uri(self, config: Dict[str, Any]) -> None:
        """Base URI is optional but must be absolute when given"""
        base_uri = config.get("base_uri")
        if base_uri is None or base_uri == "":
            return

        try:
            parse_absolute_uri(base_uri)
        except RequestClientError as e:
            self._add("base_uri", f"base_uri must be an absolute URI ({e})", base_uri)

    def _validate_media_type(self, config: Dict[str, Any]) -> None:
        media_type = config.get("media_type")
        if media_type is None:
            return

        try:
            MediaType.parse(media_type)
        except RequestClientError:
            valid = ", ".join(m.name.lower() for m in MediaType)
            self._add(
                "media_type",
                f"media_type must be one of: {valid}",
                media_type
            )

    def _validate_encoding(self, config: Dict[str, Any]) -> None:
        encoding = config.get("encoding")
        if encoding is None:
            return

        if not isinstance(encoding, str):
            self._add("encoding", "encoding must be a string", encoding)
            return

        try:
            codecs.lookup(encoding)
        except LookupError:
            self._add("encoding", f"unknown encoding: {encoding}", encoding)

    def _validate_timeout(self, config: Dict[str, Any]) -> None:
        timeout = config.get("timeout")
        if timeout is None:
            return

        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            self._add("timeout", "timeout must be a number of milliseconds", timeout)
        elif timeout <= 0:
            self._add("timeout", "timeout must be positive", timeout)

    def _validate_headers(self, config: Dict[str, Any]) -> None:
        headers = config.get("headers")
        if headers is None:
            return

        if not isinstance(headers, dict):
            self._add("headers", "headers must be a mapping", headers)
            return

        for key, value in headers.items():
            if not key:
                self._add("headers", "header names cannot be empty", key)
            elif not isinstance(value, str):
                self._add(f"headers.{key}", "header values must be strings", value)
