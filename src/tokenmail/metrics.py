import prometheus_client
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest

# Guard against duplicated metric registration when the module is imported
# multiple times (for example, when running uvicorn with the reloader).
REQUEST_COUNT = getattr(prometheus_client, "tokenmail_REQUEST_COUNT", None)
REQUEST_LATENCY = getattr(prometheus_client, "tokenmail_REQUEST_LATENCY", None)
TOKENS_GENERATED = getattr(prometheus_client, "tokenmail_TOKENS_GENERATED", None)
TOKEN_DELIVERIES = getattr(prometheus_client, "tokenmail_TOKEN_DELIVERIES", None)
TOKEN_LOOKUPS = getattr(prometheus_client, "tokenmail_TOKEN_LOOKUPS", None)
TOKENS_SWEPT = getattr(prometheus_client, "tokenmail_TOKENS_SWEPT", None)
TOKEN_STORE_SIZE = getattr(prometheus_client, "tokenmail_TOKEN_STORE_SIZE", None)
SERVICE_UP = getattr(prometheus_client, "tokenmail_SERVICE_UP", None)

# Initialize all metrics if any are None
if REQUEST_COUNT is None:
    # HTTP Metrics
    REQUEST_COUNT = Counter(
        "http_requests_total", "Total HTTP requests", ["method", "endpoint", "http_status"]
    )
    REQUEST_LATENCY = Histogram(
        "http_request_latency_seconds",
        "HTTP request latency in seconds",
        ["method", "endpoint"],
        buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1, 2, 5),
    )

    # Token lifecycle Metrics
    # Incremented when a token is generated, before the mail is attempted.
    TOKENS_GENERATED = Counter(
        "auth_tokens_generated_total", "Total tokens generated by the authentication service"
    )
    TOKEN_DELIVERIES = Counter(
        "token_deliveries_total",
        "Token emails handed to the mail transport",
        ["result"],  # result: success/failure
    )
    TOKEN_LOOKUPS = Counter(
        "token_lookups_total",
        "Token lookups by outcome",
        ["result"],  # result: found/not_found/expired
    )
    TOKENS_SWEPT = Counter("tokens_swept_total", "Expired tokens removed by the sweeper")
    TOKEN_STORE_SIZE = Gauge("token_store_size", "Tokens currently held in memory")

    SERVICE_UP = Gauge("auth_service_up", "1 = service up, 0 = down")

    # Register all metrics on the prometheus_client module
    prometheus_client.tokenmail_REQUEST_COUNT = REQUEST_COUNT  # type: ignore[attr-defined]
    prometheus_client.tokenmail_REQUEST_LATENCY = REQUEST_LATENCY  # type: ignore[attr-defined]
    prometheus_client.tokenmail_TOKENS_GENERATED = TOKENS_GENERATED  # type: ignore[attr-defined]
    prometheus_client.tokenmail_TOKEN_DELIVERIES = TOKEN_DELIVERIES  # type: ignore[attr-defined]
    prometheus_client.tokenmail_TOKEN_LOOKUPS = TOKEN_LOOKUPS  # type: ignore[attr-defined]
    prometheus_client.tokenmail_TOKENS_SWEPT = TOKENS_SWEPT  # type: ignore[attr-defined]
    prometheus_client.tokenmail_TOKEN_STORE_SIZE = TOKEN_STORE_SIZE  # type: ignore[attr-defined]
    prometheus_client.tokenmail_SERVICE_UP = SERVICE_UP  # type: ignore[attr-defined]


def metrics_response():
    data = generate_latest()
    return data, CONTENT_TYPE_LATEST
