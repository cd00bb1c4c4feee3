import prometheus_client
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

# Guard against duplicated metric registration when the module is imported
# multiple times (for example, when running uvicorn with the reloader).
REQUEST_COUNT = getattr(prometheus_client, "email_api_REQUEST_COUNT", None)
REQUEST_LATENCY = getattr(prometheus_client, "email_api_REQUEST_LATENCY", None)
TOKEN_OPERATIONS = getattr(prometheus_client, "email_api_TOKEN_OPERATIONS", None)
EMAILS_SENT = getattr(prometheus_client, "email_api_EMAILS_SENT", None)
TOKENS_STORED = getattr(prometheus_client, "email_api_TOKENS_STORED", None)

if REQUEST_COUNT is None:
    # HTTP Metrics
    REQUEST_COUNT = Counter(
        "http_requests_total", "Total HTTP requests", ["method", "endpoint", "http_status"]
    )
    REQUEST_LATENCY = Histogram(
        "http_request_latency_seconds", "HTTP request latency in seconds", ["method", "endpoint"]
    )

    # Token lifecycle
    TOKEN_OPERATIONS = Counter(
        "token_operations_total",
        "Total verification token operations",
        ["operation"],  # generate/passthrough/verify/check/revoke/expire/purge
    )
    TOKENS_STORED = Gauge(
        "verification_tokens_stored", "Verification tokens held by the token store"
    )

    # Delivery
    EMAILS_SENT = Counter(
        "emails_sent_total",
        "Transactional emails handed to the provider",
        ["template", "result"],  # result: success/failure
    )

    prometheus_client.email_api_REQUEST_COUNT = REQUEST_COUNT  # type: ignore[attr-defined]
    prometheus_client.email_api_REQUEST_LATENCY = REQUEST_LATENCY  # type: ignore[attr-defined]
    prometheus_client.email_api_TOKEN_OPERATIONS = TOKEN_OPERATIONS  # type: ignore[attr-defined]
    prometheus_client.email_api_TOKENS_STORED = TOKENS_STORED  # type: ignore[attr-defined]
    prometheus_client.email_api_EMAILS_SENT = EMAILS_SENT  # type: ignore[attr-defined]


def record_token_operation(operation: str) -> None:
    if TOKEN_OPERATIONS is not None:
        TOKEN_OPERATIONS.labels(operation=operation).inc()


def metrics_response():
    data = generate_latest()
    return data, CONTENT_TYPE_LATEST
