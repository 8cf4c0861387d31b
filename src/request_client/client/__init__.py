"""
HTTP Client module
"""

from request_client.client.audit import HttpAuditEntry, AuditLogCallback
from request_client.client.executor import (
    BAD_REQUEST_MESSAGE,
    TIMEOUT_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
    classify_outcome,
)
from request_client.client.request_client import RequestClient
from request_client.client.transport import (
    Cancelled,
    ConnectionFailed,
    Faulted,
    HttpMethod,
    HttpRequest,
    RequestsTransport,
    Responded,
    TransportOutcome,
)

__all__ = [
    "RequestClient",
    "RequestsTransport",
    "HttpMethod",
    "HttpRequest",
    "HttpAuditEntry",
    "AuditLogCallback",
    "TransportOutcome",
    "Responded",
    "ConnectionFailed",
    "Cancelled",
    "Faulted",
    "classify_outcome",
    "BAD_REQUEST_MESSAGE",
    "TIMEOUT_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
]
