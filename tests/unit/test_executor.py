"""
Outcome Classification Unit Tests
"""

from http import HTTPStatus
from typing import Optional
from unittest.mock import MagicMock

import pytest
import requests
from pydantic import BaseModel

from request_client.client import (
    BAD_REQUEST_MESSAGE,
    TIMEOUT_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    Cancelled,
    ConnectionFailed,
    Faulted,
    HttpMethod,
    HttpRequest,
    RequestsTransport,
    Responded,
    classify_outcome,
)
from request_client.exceptions import CodecError
from request_client.models import SerializationFormat


class Payload(BaseModel):
    test: Optional[str] = None


def responded(status: int, content: bytes, encoding: Optional[str] = "utf-8") -> Responded:
    return Responded(
        status_code=status,
        content=content,
        text=content.decode("utf-8", errors="replace"),
        encoding=encoding,
    )


class TestClassifyResponded:
    """Tests for outcomes with an HTTP response"""

    def test_ok_decodes_body(self):
        """Should decode into the result type with an empty detail"""
        result = classify_outcome(responded(200, b'{"test": "x"}'), Payload)

        assert result.status_code == HTTPStatus.OK
        assert result.result == Payload(test="x")
        assert result.has_result is True
        assert result.exception_detail == ""

    def test_ok_empty_body(self):
        """Should report an absent payload"""
        result = classify_outcome(responded(200, b""), Payload)

        assert result.status_code == HTTPStatus.OK
        assert result.result is None
        assert result.has_result is False
        assert result.exception is None

    def test_string_result_passes_text_through(self):
        """Should skip decoding for str"""
        result = classify_outcome(responded(200, b"<b>raw</b>"), str)

        assert result.result == "<b>raw</b>"
        assert result.has_result is True

    def test_empty_string_result_is_present(self):
        """Should keep an empty body as a present empty string"""
        result = classify_outcome(responded(200, b""), str)

        assert result.result == ""
        assert result.has_result is True

    def test_ok_decode_failure(self):
        """Should classify an undecodable OK body as InternalServerError"""
        result = classify_outcome(responded(200, b"not json"), Payload)

        assert result.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert result.exception_detail == UNKNOWN_ERROR_MESSAGE
        assert isinstance(result.exception, CodecError)

    def test_error_status_keeps_raw_body(self):
        """Should pass the status through with the body as detail"""
        result = classify_outcome(responded(404, b"missing"), Payload)

        assert result.status_code == HTTPStatus.NOT_FOUND
        assert result.result is None
        assert result.exception_detail == "missing"
        assert result.exception is None

    def test_error_status_with_decodable_body(self):
        """Should still decode an error payload that matches"""
        result = classify_outcome(responded(422, b'{"test": "bad"}'), Payload)

        assert result.status_code == HTTPStatus.UNPROCESSABLE_ENTITY
        assert result.result.test == "bad"
        assert result.exception_detail == '{"test": "bad"}'

    def test_unknown_status_code(self):
        """Should keep codes HTTPStatus does not know"""
        result = classify_outcome(responded(599, b"odd"), str)
        assert result.status_code == 599

    @pytest.mark.parametrize("status,phrase", [(404, "Not Found"), (204, "No Content"), (503, "Service Unavailable")])
    def test_empty_error_body_uses_reason_phrase(self, status, phrase):
        """Should never leave the detail empty for a non-OK status"""
        result = classify_outcome(responded(status, b""), Payload)

        assert result.status_code == status
        assert result.result is None
        assert result.exception_detail == phrase

    def test_empty_body_with_unknown_status(self):
        """Should fall back to the numeric code"""
        result = classify_outcome(responded(599, b""), str)

        assert result.result == ""
        assert result.exception_detail == "HTTP 599"

    def test_response_encoding_wins(self):
        """Should decode with the encoding the response declares"""
        body = '{"test": "çay"}'.encode("latin-1")
        outcome = Responded(status_code=200, content=body, text=body.decode("latin-1"), encoding="latin-1")

        result = classify_outcome(outcome, Payload, SerializationFormat.JSON, "utf-8")

        assert result.result.test == "çay"

    def test_client_encoding_is_fallback(self):
        """Should use the client encoding when the response declares none"""
        body = '{"test": "çay"}'.encode("utf-16")
        outcome = responded(200, body, encoding=None)

        result = classify_outcome(outcome, Payload, SerializationFormat.JSON, "utf-16")

        assert result.result.test == "çay"


class TestClassifyFailures:
    """Tests for outcomes without an HTTP response"""

    def test_connection_failed(self):
        """Should map to BadRequest"""
        cause = requests.exceptions.ConnectionError("refused")
        result = classify_outcome(ConnectionFailed(cause), Payload)

        assert result.status_code == HTTPStatus.BAD_REQUEST
        assert result.exception_detail == BAD_REQUEST_MESSAGE
        assert result.exception is cause
        assert result.result is None

    def test_cancelled(self):
        """Should map to GatewayTimeout"""
        cause = requests.exceptions.ReadTimeout("slow")
        result = classify_outcome(Cancelled(cause), Payload)

        assert result.status_code == HTTPStatus.GATEWAY_TIMEOUT
        assert result.exception_detail == TIMEOUT_MESSAGE
        assert result.exception is cause

    def test_faulted(self):
        """Should map to InternalServerError"""
        cause = RuntimeError("boom")
        result = classify_outcome(Faulted(cause), Payload)

        assert result.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert result.exception_detail == UNKNOWN_ERROR_MESSAGE
        assert result.exception is cause


class TestRequestsTransport:
    """Tests for RequestsTransport.send"""

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture
    def request_(self):
        return HttpRequest(method=HttpMethod.GET, url="https://postman-echo.com/get", timeout=2.0)

    def test_send_returns_responded(self, session, request_):
        """Should capture status, body and encoding"""
        response = MagicMock()
        response.status_code = 201
        response.content = b"ok"
        response.text = "ok"
        response.headers = {"Content-Type": "text/plain"}
        response.encoding = "utf-8"
        session.request.return_value.__enter__.return_value = response

        outcome = RequestsTransport(session=session).send(request_)

        assert outcome == Responded(201, b"ok", "ok", {"Content-Type": "text/plain"}, "utf-8")
        session.request.assert_called_once_with(
            "GET",
            "https://postman-echo.com/get",
            headers={},
            data=None,
            timeout=2.0,
            verify=True,
        )

    @pytest.mark.parametrize("error,outcome_type", [
        (requests.exceptions.ConnectionError("refused"), ConnectionFailed),
        (requests.exceptions.InvalidURL("bad"), ConnectionFailed),
        (requests.exceptions.ReadTimeout("slow"), Cancelled),
        (requests.exceptions.ConnectTimeout("slow"), Cancelled),
        (RuntimeError("boom"), Faulted),
    ])
    def test_send_classifies_errors(self, session, request_, error, outcome_type):
        """Should turn exceptions into outcome values"""
        session.request.side_effect = error

        outcome = RequestsTransport(session=session).send(request_)

        assert isinstance(outcome, outcome_type)
        assert outcome.cause is error

    def test_close_is_idempotent(self, session):
        """Should close the session once"""
        transport = RequestsTransport(session=session)
        transport.close()
        transport.close()

        assert transport.closed is True
        session.close.assert_called_once()
