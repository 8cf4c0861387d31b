"""
HTTP transport layer
Performs exactly one round trip per request over a pooled requests session
and reports the result as an outcome value instead of raising
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

# Logger for this module
logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass
class HttpRequest:
    """A fully composed request ready for the transport"""
    method: HttpMethod
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    timeout: Optional[float] = None  # seconds


@dataclass(frozen=True)
class Responded:
    """The server answered, whatever the status code"""
    status_code: int
    content: bytes
    text: str
    headers: Dict[str, str] = field(default_factory=dict)
    encoding: Optional[str] = None


@dataclass(frozen=True)
class ConnectionFailed:
    """No response: refused connection, DNS or TLS failure, malformed request"""
    cause: BaseException


@dataclass(frozen=True)
class Cancelled:
    """The transport timeout expired before a response arrived"""
    cause: BaseException


@dataclass(frozen=True)
class Faulted:
    """Any other failure"""
    cause: BaseException


TransportOutcome = Union[Responded, ConnectionFailed, Cancelled, Faulted]


class RequestsTransport:
    """
    Transport backed by a single requests.Session

    The session's default headers are cleared; callers pass every header
    on each request. Retries are disabled at the adapter so each call is
    one round trip.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        verify: bool = True,
    ) -> None:
        self.verify = verify
        self._session = session or self._create_session()
        self._closed = False

    def _create_session(self) -> requests.Session:
        """Create requests session with a pooling adapter and no retries"""
        session = requests.Session()
        session.headers.clear()

        adapter = HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=Retry(total=0, read=False),
        )

        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    @property
    def session(self) -> requests.Session:
        """Underlying requests session"""
        return self._session

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, request: HttpRequest) -> TransportOutcome:
        """
        Perform one round trip

        Args:
            request: Composed request

        Returns:
            Responded for any HTTP response, otherwise the failure category
        """
        try:
            with self._session.request(
                request.method.value,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=request.timeout,
                verify=self.verify,
            ) as response:
                content = response.content
                return Responded(
                    status_code=response.status_code,
                    content=content,
                    text=response.text,
                    headers=dict(response.headers),
                    encoding=response.encoding,
                )
        # Timeout first: ConnectTimeout is also a ConnectionError
        except requests.exceptions.Timeout as e:
            return Cancelled(e)
        except requests.exceptions.RequestException as e:
            return ConnectionFailed(e)
        except Exception as e:
            logger.debug(f"Unexpected transport failure for {request.method.value} {request.url}: {e!r}")
            return Faulted(e)

    async def send_async(self, request: HttpRequest) -> TransportOutcome:
        """Perform one round trip on a worker thread"""
        return await asyncio.to_thread(self.send, request)

    def close(self) -> None:
        """Close the HTTP session; later calls are no-ops"""
        if self._closed:
            return
        self._closed = True
        self._session.close()
