"""
In-process echo server mounted on a client's requests session
"""

import json
from http import HTTPStatus
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlsplit

import bson
import requests
from pydantic import BaseModel, Field
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from request_client import RequestClient
from request_client.serialization import xml_codec

BASE_URI = "http://echo.test/"

ECHO_PATHS = {"get": "GET", "post": "POST", "put": "PUT", "delete": "DELETE"}

NOT_FOUND_PAGE = b"<!DOCTYPE html><html><body>Not Found</body></html>"


class Args(BaseModel):
    test: Optional[str] = None


class Echoed(BaseModel):
    test: Optional[str] = None


class ResultDto(BaseModel):
    """Shape of an echo response"""
    args: Optional[Args] = None
    data: Optional[str] = None
    echoed: Optional[Echoed] = Field(default=None, alias="json")
    headers: Optional[Dict[str, str]] = None
    url: Optional[str] = None


class RequestDto(BaseModel):
    test: Optional[str] = None
    note: Optional[str] = None


class EchoAdapter(BaseAdapter):
    """
    Answers like postman-echo: /get, /post, /put and /delete echo the
    request back, /status/<code> answers with that code, anything else is
    a 404 HTML page. Set ``error`` to make the next sends raise it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.requests: List[requests.PreparedRequest] = []
        self.timeouts: List[Any] = []
        self.error: Optional[BaseException] = None

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.timeouts.append(timeout)

        if self.error is not None:
            raise self.error

        parts = urlsplit(request.url)
        path = parts.path.strip("/")

        if path.startswith("status/"):
            code = int(path.split("/", 1)[1])
            return self._build(request, code, f"status {code}".encode(), "text/plain")

        if ECHO_PATHS.get(path) != request.method:
            return self._build(request, HTTPStatus.NOT_FOUND, NOT_FOUND_PAGE, "text/html")

        payload = {
            "args": dict(parse_qsl(parts.query)),
            "data": self._data(request),
            "json": self._decode_body(request),
            "headers": {key.lower(): value for key, value in request.headers.items()},
            "url": request.url,
        }
        return self._encode(request, payload)

    def close(self) -> None:
        pass

    def _data(self, request) -> str:
        body = request.body or b""
        content_type = request.headers.get("Content-Type", "")
        if "bson" in content_type:
            return ""
        return body.decode("utf-8") if isinstance(body, bytes) else body

    def _decode_body(self, request) -> Any:
        body = request.body
        if not body:
            return None

        content_type = request.headers.get("Content-Type", "")
        if "xml" in content_type:
            return xml_codec.loads(body)
        if "bson" in content_type:
            return bson.decode(body)
        if "json" in content_type:
            return json.loads(body)
        return None

    def _encode(self, request, payload: Dict[str, Any]) -> requests.Response:
        accept = request.headers.get("Accept", "application/json")
        if "xml" in accept:
            return self._build(request, HTTPStatus.OK, xml_codec.dumps(payload), "application/xml; charset=utf-8")
        if "bson" in accept:
            return self._build(request, HTTPStatus.OK, bson.encode(payload), "application/bson")
        return self._build(request, HTTPStatus.OK, json.dumps(payload).encode("utf-8"), "application/json; charset=utf-8")

    def _build(self, request, status: int, content: bytes, content_type: str) -> requests.Response:
        response = requests.Response()
        response.status_code = int(status)
        response._content = content
        response._content_consumed = True
        response.headers = CaseInsensitiveDict({"Content-Type": content_type})
        response.encoding = None if content_type == "application/bson" else "utf-8"
        response.url = request.url
        response.request = request
        response.reason = HTTPStatus(int(status)).phrase
        return response


def mount_echo(client: RequestClient) -> EchoAdapter:
    adapter = EchoAdapter()
    client.transport.session.mount("http://", adapter)
    return adapter

