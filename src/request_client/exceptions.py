"""Exception classes for the request client"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class RequestClientErrorCategory(str, Enum):
    """Request client error category codes"""
    ARGUMENT = "ARG"
    FORMAT = "FMT"
    VALIDATION = "VAL"
    CODEC = "CODEC"
    CONFIG = "CONFIG"
    UNKNOWN = "UNKNOWN"


class RequestClientError(Exception):
    """
    Base exception for request client errors

    Only configuration mistakes are raised to the caller. Network and
    codec failures are captured into a RequestResult instead.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.cause = cause
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> RequestClientErrorCategory:
        """Determine error category from code"""
        if not code:
            return RequestClientErrorCategory.UNKNOWN

        for category in RequestClientErrorCategory:
            if category is not RequestClientErrorCategory.UNKNOWN and code.startswith(category.value):
                return category

        return RequestClientErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: RequestClientErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        return " ".join(parts)


class InvalidArgumentError(RequestClientError, ValueError):
    """A required argument is missing, empty or outside its domain"""

    def __init__(self, argument: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"{argument} cannot be null or empty.",
            code="ARG01",
            details={"argument": argument},
        )
        self.argument = argument


class InvalidFormatError(RequestClientError, ValueError):
    """A value was supplied but could not be parsed"""

    def __init__(self, message: str, value: Optional[Any] = None) -> None:
        super().__init__(message, code="FMT01", details={"value": value})
        self.value = value


class ValidationError(RequestClientError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VAL01", details=details)
        self.field = field


class CodecError(RequestClientError):
    """Serialization or deserialization failure"""

    def __init__(
        self,
        message: str,
        code: str = "CODEC01",
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause)


class ConfigError(RequestClientError):
    """Configuration error"""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
