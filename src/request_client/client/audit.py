"""
Request auditing
Audit entries and redaction of sensitive header values for logs
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from request_client.models.result import RequestResult


# Header names (or fragments) whose values never reach logs
SENSITIVE_FIELDS = [
    "authorization",
    "x-api-key",
    "cookie",
    "token",
    "password",
    "secret",
]

REDACTED = "[REDACTED]"


@dataclass
class HttpAuditEntry:
    """Audit log entry for one request"""
    timestamp: str
    method: str
    url: str
    headers: Dict[str, str]
    status_code: int
    duration: int  # milliseconds
    success: bool
    error: Optional[str] = None


AuditLogCallback = Callable[[HttpAuditEntry], None]


def redact_sensitive_data(obj: Any) -> Any:
    """Redact sensitive values from a mapping (recursively) for logging"""
    if obj is None or isinstance(obj, str):
        return obj

    if isinstance(obj, list):
        return [redact_sensitive_data(item) for item in obj]

    if isinstance(obj, Mapping):
        redacted = {}
        for key, value in obj.items():
            lower_key = str(key).lower()
            if any(field in lower_key for field in SENSITIVE_FIELDS):
                redacted[key] = REDACTED
            elif isinstance(value, (Mapping, list)):
                redacted[key] = redact_sensitive_data(value)
            else:
                redacted[key] = value
        return redacted

    return obj


def _error_text(result: RequestResult[Any]) -> Optional[str]:
    if result.exception is not None:
        return repr(result.exception)
    if result.is_success:
        return None
    return result.exception_detail or None


def create_audit_entry(
    method: str,
    url: str,
    headers: Mapping[str, str],
    result: RequestResult[Any],
    start_time: float,
) -> HttpAuditEntry:
    """Create audit log entry from a finished request"""
    duration = int((time.time() - start_time) * 1000)

    return HttpAuditEntry(
        timestamp=datetime.now(timezone.utc).isoformat(),
        method=method,
        url=url,
        headers=redact_sensitive_data(dict(headers)),
        status_code=int(result.status_code),
        duration=duration,
        success=result.is_success,
        error=_error_text(result),
    )
