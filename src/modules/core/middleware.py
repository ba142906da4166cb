import json
import time
import uuid
from typing import Any, Callable, Dict, Mapping

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger("http")

REDACTED = "[REDACTED]"

SENSITIVE_FIELDS = (
    "password",
    "senha",
    "token",
    "authorization",
    "api_key",
    "apikey",
    "secret",
    "credit_card",
    "cvv",
    "cpf",
    "cnpj",
)

EXCLUDED_HEADERS = {"authorization", "cookie", "x-api-key"}


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy *headers* replacing credential-bearing values with ``[REDACTED]``."""
    return {
        key: REDACTED if key.lower() in EXCLUDED_HEADERS else value
        for key, value in headers.items()
    }


def sanitize_payload(value: Any) -> Any:
    """Recursively redact keys that look sensitive in dicts and lists."""
    if isinstance(value, Mapping):
        sanitized: Dict[str, Any] = {}
        for key, item in value.items():
            lowered = str(key).lower()
            if any(field in lowered for field in SENSITIVE_FIELDS):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_payload(item)
        return sanitized
    if isinstance(value, list):
        return [sanitize_payload(item) for item in value]
    return value


def get_client_ip(request: HttpRequest) -> str:
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.META.get("HTTP_X_REAL_IP")
    if real_ip:
        return real_ip
    return request.META.get("REMOTE_ADDR") or "unknown"


def _json_body(request: HttpRequest) -> Any:
    if request.content_type != "application/json" or not request.body:
        return None
    try:
        return json.loads(request.body)
    except ValueError:
        return None


class CorrelationIdMiddleware:
    """Middleware that tags and logs every request/response pair.

    Reads X-Request-ID header from the incoming request. If absent,
    generates a new UUID4. The ID is bound as a structlog contextvar so it
    lands on every log line, and is returned to the client via the
    X-Request-ID response header.

    Headers, query string and JSON body are logged after sanitization;
    the response is logged at ``error`` for 5xx, ``warning`` for 4xx.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        started = time.monotonic()
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info(
            "request_started",
            method=request.method,
            path=request.get_full_path(),
            ip=get_client_ip(request),
            user_agent=request.META.get("HTTP_USER_AGENT", "unknown"),
            headers=sanitize_headers(request.headers),
            query=sanitize_payload(request.GET.dict()) or None,
            body=sanitize_payload(_json_body(request)),
        )

        response = self.get_response(request)

        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - started) * 1000, 2),
        )

        response["X-Request-ID"] = cid
        return response
