"""
Request client configuration types
Type-safe settings used to build a configured RequestClient
"""

import codecs
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from request_client.models.media_type import DEFAULT_MEDIA_TYPE, MediaType
from request_client.utils.uri import parse_absolute_uri


class ConfigDefaults:
    """Default configuration values"""
    MEDIA_TYPE = DEFAULT_MEDIA_TYPE
    ENCODING = "utf-8"
    TIMEOUT = 100 * 60 * 1000  # 100 minutes, in milliseconds
    ACCEPT_LANGUAGE = ["tr-TR", "en-US"]
    VERIFY_SSL = True
    ENABLE_AUDIT_LOG = False


# Environment variable mapping
ENV_VAR_MAPPING = {
    "REQUEST_CLIENT_BASE_URI": "base_uri",
    "REQUEST_CLIENT_MEDIA_TYPE": "media_type",
    "REQUEST_CLIENT_ENCODING": "encoding",
    "REQUEST_CLIENT_TIMEOUT": "timeout",
    "REQUEST_CLIENT_ACCEPT_LANGUAGE": "accept_language",
    "REQUEST_CLIENT_AUTHORIZATION": "authorization",
    "REQUEST_CLIENT_VERIFY_SSL": "verify_ssl",
    "REQUEST_CLIENT_ENABLE_AUDIT_LOG": "enable_audit_log",
}


class ClientSettings(BaseModel):
    """
    Client settings
    Everything a RequestClient needs besides its transport
    """

    base_uri: Optional[str] = Field(
        default=None,
        description="Absolute base URI every request path is appended to"
    )
    media_type: MediaType = Field(
        default=ConfigDefaults.MEDIA_TYPE,
        description="Media type used for Accept, request bodies and response decoding"
    )
    encoding: str = Field(
        default=ConfigDefaults.ENCODING,
        description="Text encoding for request bodies"
    )
    timeout: int = Field(
        default=ConfigDefaults.TIMEOUT,
        description="Request timeout in milliseconds",
    )
    accept_language: List[str] = Field(
        default_factory=lambda: list(ConfigDefaults.ACCEPT_LANGUAGE),
        description="Accept-Language preference list, most preferred first"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra default headers sent with every request"
    )
    authorization: Optional[str] = Field(
        default=None,
        description="Authorization header value as 'Scheme parameter'"
    )
    verify_ssl: bool = Field(
        default=ConfigDefaults.VERIFY_SSL,
        description="Verify TLS certificates"
    )
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Log an audit entry for every request"
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("base_uri")
    @classmethod
    def validate_base_uri(cls, v: Optional[str]) -> Optional[str]:
        """Validate base_uri is an absolute URI"""
        if v is None or v == "":
            return None
        return parse_absolute_uri(v)

    @field_validator("media_type", mode="before")
    @classmethod
    def validate_media_type(cls, v: object) -> MediaType:
        """Accept content types and member names as well as members"""
        return MediaType.parse(v)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate encoding is a known codec and normalize its name"""
        try:
            return codecs.lookup(v).name
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e

    @field_validator("accept_language", mode="before")
    @classmethod
    def split_accept_language(cls, v: object) -> object:
        """Allow a comma separated string"""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v
