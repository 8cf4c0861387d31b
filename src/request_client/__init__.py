"""
Request Client for Python

Fluent HTTP client returning uniform RequestResult envelopes
"""

from request_client.client import (
    RequestClient,
    RequestsTransport,
    HttpMethod,
    HttpAuditEntry,
)
from request_client.exceptions import (
    RequestClientError,
    RequestClientErrorCategory,
    InvalidArgumentError,
    InvalidFormatError,
    ValidationError,
    CodecError,
    ConfigError,
)

# Configuration
from request_client.config import (
    ClientSettings,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from request_client.models import (
    HTTPStatus,
    MediaType,
    RequestResult,
    SerializationFormat,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "RequestClient",
    "RequestsTransport",
    "HttpMethod",
    "HttpAuditEntry",
    # Exceptions
    "RequestClientError",
    "RequestClientErrorCategory",
    "InvalidArgumentError",
    "InvalidFormatError",
    "ValidationError",
    "CodecError",
    "ConfigError",
    # Configuration
    "ClientSettings",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
    "HTTPStatus",
    "MediaType",
    "RequestResult",
    "SerializationFormat",
]
