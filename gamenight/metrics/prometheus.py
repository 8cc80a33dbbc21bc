# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "gamenight_requests_total",
    "Total HTTP requests to the scheduler",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "gamenight_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "gamenight_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
GAMES_CREATED = Counter(
    "gamenight_games_created_total",
    "Total games created",
)
ACTIVE_GAMES = Gauge(
    "gamenight_active_games",
    "Number of games currently stored",
)
VOTES_SUBMITTED = Counter(
    "gamenight_votes_submitted_total",
    "Total availability submissions",
)
SESSIONS_SCHEDULED = Counter(
    "gamenight_sessions_scheduled_total",
    "Total schedule commits",
    ["action"],
)
NOTIFICATIONS_SENT = Counter(
    "gamenight_notifications_sent_total",
    "Total webhook notifications attempted",
    ["status"],
)
REGISTERED_USERS = Gauge(
    "gamenight_registered_users",
    "Number of registered users",
)
