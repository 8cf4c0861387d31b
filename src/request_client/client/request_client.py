"""
Request client
Fluent configuration and the GET/POST/PUT/DELETE verbs, sync and async,
each returning a RequestResult instead of raising on network failures
"""

import codecs
import logging
import time
from datetime import timedelta
from typing import Any, List, Optional, Tuple, Type, Union

from requests.exceptions import InvalidHeader
from requests.structures import CaseInsensitiveDict
from requests.utils import check_header_validity

from request_client.client.audit import (
    AuditLogCallback,
    create_audit_entry,
    redact_sensitive_data,
)
from request_client.client.executor import classify_outcome
from request_client.client.transport import (
    Faulted,
    HttpMethod,
    HttpRequest,
    RequestsTransport,
    TransportOutcome,
)
from request_client.config.client_settings import ClientSettings
from request_client.exceptions import CodecError, InvalidArgumentError
from request_client.models.media_type import (
    MediaType,
    SerializationFormat,
    describe,
    format_of,
    is_binary,
)
from request_client.models.result import RequestResult
from request_client.serialization import codec
from request_client.utils.uri import compose_url, parse_absolute_uri

# Logger for this module
logger = logging.getLogger(__name__)

Timeout = Union[timedelta, int, float]


def _check_header(key: str, value: str) -> None:
    """Reject names and values requests would refuse to send"""
    try:
        check_header_validity((key, value))
    except InvalidHeader as e:
        raise InvalidArgumentError("header", f"header {key!r} is invalid: {e}") from e


class RequestClient:
    """
    Fluent HTTP request client

    Every configuration method mutates the client and returns it, so a
    client is usually built in one chain. The active media type decides
    the Accept header, how request bodies are encoded and how response
    bodies are decoded.

    Example:
        >>> client = (
        ...     RequestClient.set_base_uri("https://postman-echo.com/")
        ...     .set_media_type(MediaType.JSON)
        ...     .set_bearer_authorization_header("token")
        ... )
        >>> result = client.get("get?test=test", ResultDto)
        >>> result.status_code, result.result.args
    """

    def __init__(
        self,
        base_uri: Any,
        settings: Optional[ClientSettings] = None,
        transport: Optional[RequestsTransport] = None,
    ) -> None:
        """
        Create a client; prefer set_base_uri or from_settings

        Args:
            base_uri: Absolute base URI (string, Enum member or parsed URI)
            settings: Initial configuration, defaults when omitted
            transport: Transport to own, a new requests session when omitted
        """
        settings = settings or ClientSettings()

        self._base_uri = parse_absolute_uri(base_uri)
        self._encoding = settings.encoding
        self._media_type = settings.media_type
        self._timeout = timedelta(milliseconds=settings.timeout)
        self._accept_language: List[str] = list(settings.accept_language)
        self._authorization: Optional[str] = None
        if settings.authorization:
            _check_header("Authorization", settings.authorization)
            self._authorization = settings.authorization
        self._headers: List[Tuple[str, str]] = []

        self._enable_audit_log = settings.enable_audit_log
        self._audit_log_callback: Optional[AuditLogCallback] = None

        self._transport = transport or RequestsTransport(verify=settings.verify_ssl)
        self._closed = False

        self._add_accept(self._media_type)
        for key, value in settings.headers.items():
            self.add_header(key, value)

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def set_base_uri(
        cls,
        uri: Any,
        settings: Optional[ClientSettings] = None,
        transport: Optional[RequestsTransport] = None,
    ) -> "RequestClient":
        """
        Create a client for a base URI

        Args:
            uri: URI string, Enum member whose value is the URI, or a parsed URI

        Returns:
            New RequestClient with default configuration

        Raises:
            InvalidArgumentError: If uri is None, empty or whitespace
            InvalidFormatError: If uri is not an absolute URI
        """
        return cls(uri, settings=settings, transport=transport)

    create_with_base_uri = set_base_uri

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: Optional[RequestsTransport] = None,
    ) -> "RequestClient":
        """
        Create a client from resolved settings

        Raises:
            InvalidArgumentError: If settings carry no base_uri
        """
        if not settings.base_uri:
            raise InvalidArgumentError("base_uri")
        return cls(settings.base_uri, settings=settings, transport=transport)

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------

    def set_encoding(self, encoding: str) -> "RequestClient":
        """
        Set the text encoding used for request bodies

        Raises:
            InvalidArgumentError: If encoding is None or not a known codec
        """
        if encoding is None:
            raise InvalidArgumentError("encoding")

        try:
            self._encoding = codecs.lookup(encoding).name
        except (LookupError, TypeError) as e:
            raise InvalidArgumentError("encoding", f"encoding is invalid: {encoding!r}") from e
        return self

    def set_media_type(self, media_type: Union[MediaType, str]) -> "RequestClient":
        """
        Switch the media type used for Accept, body encoding and decoding

        Raises:
            InvalidArgumentError: If media_type is not a known media type
        """
        new_media_type = MediaType.parse(media_type)

        self._remove_accept(self._media_type)
        self._media_type = new_media_type
        self._add_accept(new_media_type)
        return self

    def set_authorization_header(
        self, scheme: str, parameter: Optional[str] = None
    ) -> "RequestClient":
        """
        Replace the Authorization header with '<scheme> <parameter>'

        Raises:
            InvalidArgumentError: If scheme is empty or the value is not a
                legal header value
        """
        if not scheme or not scheme.strip():
            raise InvalidArgumentError("scheme")

        authorization = f"{scheme} {parameter}" if parameter else scheme
        _check_header("Authorization", authorization)
        self._authorization = authorization
        return self

    def set_basic_authorization_header(self, basic_auth_header: str) -> "RequestClient":
        """Replace the Authorization header with Basic credentials"""
        return self.set_authorization_header("Basic", basic_auth_header)

    def set_bearer_authorization_header(self, bearer_auth_header: str) -> "RequestClient":
        """Replace the Authorization header with a Bearer token"""
        return self.set_authorization_header("Bearer", bearer_auth_header)

    def add_header(self, key: str, value: str) -> "RequestClient":
        """
        Add a default header; repeated keys accumulate

        Raises:
            InvalidArgumentError: If key is empty, value is None, or either
                is not a legal header name or value
        """
        if not key:
            raise InvalidArgumentError("key")
        if value is None:
            raise InvalidArgumentError("value")
        if not isinstance(value, str):
            raise InvalidArgumentError("value", f"value must be a string, got {type(value).__name__}")
        _check_header(key, value)

        self._headers.append((key, value))
        return self

    def set_timeout(self, timeout: Timeout) -> "RequestClient":
        """
        Set the request timeout

        Args:
            timeout: A timedelta, or a number of milliseconds
        """
        if isinstance(timeout, timedelta):
            self._timeout = timeout
        elif isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
            self._timeout = timedelta(milliseconds=timeout)
        else:
            raise InvalidArgumentError(
                "timeout", f"timeout must be a timedelta or milliseconds, got {timeout!r}"
            )
        return self

    def set_audit_log_callback(self, callback: AuditLogCallback) -> "RequestClient":
        """Set audit log callback and enable auditing"""
        self._audit_log_callback = callback
        self._enable_audit_log = True
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def media_type(self) -> MediaType:
        return self._media_type

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    @property
    def headers(self) -> CaseInsensitiveDict:
        """Copy of the headers sent with every request"""
        return self._render_headers()

    @property
    def transport(self) -> RequestsTransport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._closed

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def get(self, path: Optional[str], result_type: Type[Any] = str) -> RequestResult[Any]:
        """
        Perform GET request

        Args:
            path: Appended verbatim to the base URI
            result_type: Type to decode the body into; str returns the raw text

        Returns:
            Result envelope
        """
        return self._execute(HttpMethod.GET, path, result_type)

    async def get_async(self, path: Optional[str], result_type: Type[Any] = str) -> RequestResult[Any]:
        """Perform GET request without blocking the event loop"""
        return await self._execute_async(HttpMethod.GET, path, result_type)

    def post(
        self,
        path: Optional[str],
        body: Optional[Any] = None,
        result_type: Type[Any] = str,
    ) -> RequestResult[Any]:
        """
        Perform POST request

        Args:
            path: Appended verbatim to the base URI
            body: Encoded with the active media type; None sends no content
            result_type: Type to decode the body into; str returns the raw text

        Returns:
            Result envelope
        """
        return self._execute(HttpMethod.POST, path, result_type, body)

    async def post_async(
        self,
        path: Optional[str],
        body: Optional[Any] = None,
        result_type: Type[Any] = str,
    ) -> RequestResult[Any]:
        """Perform POST request without blocking the event loop"""
        return await self._execute_async(HttpMethod.POST, path, result_type, body)

    def put(
        self,
        path: Optional[str],
        body: Optional[Any] = None,
        result_type: Type[Any] = str,
    ) -> RequestResult[Any]:
        """Perform PUT request; see post"""
        return self._execute(HttpMethod.PUT, path, result_type, body)

    async def put_async(
        self,
        path: Optional[str],
        body: Optional[Any] = None,
        result_type: Type[Any] = str,
    ) -> RequestResult[Any]:
        """Perform PUT request without blocking the event loop"""
        return await self._execute_async(HttpMethod.PUT, path, result_type, body)

    def delete(self, path: Optional[str], result_type: Type[Any] = str) -> RequestResult[Any]:
        """Perform DELETE request"""
        return self._execute(HttpMethod.DELETE, path, result_type)

    async def delete_async(self, path: Optional[str], result_type: Type[Any] = str) -> RequestResult[Any]:
        """Perform DELETE request without blocking the event loop"""
        return await self._execute_async(HttpMethod.DELETE, path, result_type)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _execute(
        self,
        method: HttpMethod,
        path: Optional[str],
        result_type: Type[Any],
        body: Optional[Any] = None,
    ) -> RequestResult[Any]:
        start_time = time.time()
        fmt = format_of(self._media_type)
        request, failure = self._prepare(method, path, body, fmt)

        if failure is None:
            self._log_request(request)
            outcome = self._transport.send(request)
        else:
            outcome = failure

        return self._resolve(request, outcome, result_type, fmt, start_time)

    async def _execute_async(
        self,
        method: HttpMethod,
        path: Optional[str],
        result_type: Type[Any],
        body: Optional[Any] = None,
    ) -> RequestResult[Any]:
        start_time = time.time()
        fmt = format_of(self._media_type)
        request, failure = self._prepare(method, path, body, fmt)

        if failure is None:
            self._log_request(request)
            outcome = await self._transport.send_async(request)
        else:
            outcome = failure

        return self._resolve(request, outcome, result_type, fmt, start_time)

    def _prepare(
        self,
        method: HttpMethod,
        path: Optional[str],
        body: Optional[Any],
        fmt: SerializationFormat,
    ) -> Tuple[HttpRequest, Optional[TransportOutcome]]:
        """Compose URL and headers, encode the body with the active media type"""
        request = HttpRequest(
            method=method,
            url=compose_url(self._base_uri, path),
            headers=dict(self._render_headers()),
            timeout=self._timeout.total_seconds(),
        )

        if body is None:
            return request, None

        try:
            request.body = codec.serialize(body, fmt, self._encoding)
        except CodecError as e:
            return request, Faulted(e)

        content_type = self._content_type()
        if content_type is not None:
            request.headers["Content-Type"] = content_type
        return request, None

    def _resolve(
        self,
        request: HttpRequest,
        outcome: TransportOutcome,
        result_type: Type[Any],
        fmt: SerializationFormat,
        start_time: float,
    ) -> RequestResult[Any]:
        result = classify_outcome(outcome, result_type, fmt, self._encoding)

        if result.exception is not None:
            logger.warning(
                f"{request.method.value} {request.url} failed with "
                f"{int(result.status_code)}: {result.exception_detail} ({result.exception!r})"
            )

        if self._enable_audit_log and self._audit_log_callback:
            self._audit_log_callback(
                create_audit_entry(
                    method=request.method.value,
                    url=request.url,
                    headers=request.headers,
                    result=result,
                    start_time=start_time,
                )
            )

        return result

    def _log_request(self, request: HttpRequest) -> None:
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"{request.method.value} {request.url} "
                f"headers={redact_sensitive_data(request.headers)}"
            )

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def _content_type(self) -> Optional[str]:
        if self._media_type is MediaType.NONE:
            return None
        if is_binary(self._media_type):
            return describe(self._media_type)
        return f"{describe(self._media_type)}; charset={self._encoding}"

    def _add_accept(self, media_type: MediaType) -> None:
        if media_type is MediaType.NONE:
            return
        self._headers.append(("Accept", describe(media_type)))

    def _remove_accept(self, media_type: MediaType) -> None:
        accept = describe(media_type)
        self._headers = [
            (key, value)
            for key, value in self._headers
            if not (key.lower() == "accept" and value == accept)
        ]

    def _header_items(self) -> List[Tuple[str, str]]:
        items = list(self._headers)
        if self._accept_language:
            items.append(("Accept-Language", ", ".join(self._accept_language)))
        items.append(("Accept-Encoding", self._encoding))
        if self._authorization:
            items.append(("Authorization", self._authorization))
        return items

    def _render_headers(self) -> CaseInsensitiveDict:
        """Fold repeated header names into one comma separated value"""
        rendered: CaseInsensitiveDict = CaseInsensitiveDict()
        for key, value in self._header_items():
            if key in rendered:
                rendered[key] = f"{rendered[key]}, {value}"
            else:
                rendered[key] = value
        return rendered

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the transport; closing twice is a no-op"""
        if self._closed:
            return
        self._closed = True
        self._transport.close()

    def __enter__(self) -> "RequestClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
