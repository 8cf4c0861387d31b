"""
Outcome classification
Turns every transport outcome into a RequestResult so verbs never raise
for network or decoding problems
"""

import logging
from http import HTTPStatus
from typing import Any, Optional, Type

from request_client.client.transport import (
    Cancelled,
    ConnectionFailed,
    Faulted,
    Responded,
    TransportOutcome,
)
from request_client.exceptions import CodecError
from request_client.models.media_type import SerializationFormat
from request_client.models.result import RequestResult, to_status
from request_client.serialization import codec

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "Timeout."
BAD_REQUEST_MESSAGE = "Bad Request."
UNKNOWN_ERROR_MESSAGE = "An error has occured."


def _reason(status: Any) -> str:
    """Detail for a non-OK response that carries no body"""
    if isinstance(status, HTTPStatus):
        return status.phrase
    return f"HTTP {status}"


def _from_response(
    outcome: Responded,
    result_type: Type[Any],
    fmt: SerializationFormat,
    encoding: str,
) -> RequestResult[Any]:
    status = to_status(outcome.status_code)
    detail = "" if status == HTTPStatus.OK else outcome.text or _reason(status)

    if result_type is str:
        return RequestResult.success(status, outcome.text, True, detail)

    try:
        value = codec.deserialize(
            outcome.content, result_type, fmt, outcome.encoding or encoding
        )
    except CodecError as e:
        if status == HTTPStatus.OK:
            raise
        # Error pages rarely match the result type; the raw body is the detail
        logger.debug(f"Error response body is not a {fmt.value} payload: {e}")
        return RequestResult.success(status, None, False, detail)

    return RequestResult.success(status, value, value is not None, detail)


def classify_outcome(
    outcome: TransportOutcome,
    result_type: Type[Any] = str,
    fmt: SerializationFormat = SerializationFormat.JSON,
    encoding: str = "utf-8",
) -> RequestResult[Any]:
    """
    Build the result envelope for a transport outcome

    Args:
        outcome: What the transport reported
        result_type: Type to decode the response body into; str skips decoding
        fmt: Serialization format of the active media type
        encoding: Fallback text encoding when the response declares none

    Returns:
        RequestResult with status, payload, detail and captured exception
    """
    if isinstance(outcome, Responded):
        try:
            return _from_response(outcome, result_type, fmt, encoding)
        except CodecError as e:
            return RequestResult.failure(
                HTTPStatus.INTERNAL_SERVER_ERROR, UNKNOWN_ERROR_MESSAGE, e
            )

    if isinstance(outcome, ConnectionFailed):
        return RequestResult.failure(
            HTTPStatus.BAD_REQUEST, BAD_REQUEST_MESSAGE, outcome.cause
        )

    if isinstance(outcome, Cancelled):
        return RequestResult.failure(
            HTTPStatus.GATEWAY_TIMEOUT, TIMEOUT_MESSAGE, outcome.cause
        )

    cause: Optional[BaseException] = outcome.cause if isinstance(outcome, Faulted) else None
    return RequestResult.failure(
        HTTPStatus.INTERNAL_SERVER_ERROR, UNKNOWN_ERROR_MESSAGE, cause
    )
