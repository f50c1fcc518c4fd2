"""Application constants."""

USER_AGENT = "concession-map/1.0 (+dataset fetch)"
PLACEHOLDER_MARKER = "Идентифика"
UNKNOWN_LABEL = "unknown"
CONFIDENCE_TIERS = ("high", "medium", "low", "none")
CONFIDENCE_OPTIONS = ("high", "medium", "low")
DEFAULT_TOP_K = 5
COMMANDS = (
    "stats",
    "filter",
    "options",
    "markers",
    "quality",
)
EXIT_SUCCESS = 0
EXIT_EMPTY_RESULT = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "command",
    "source",
    "event",
    "status",
    "duration_ms",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
