"""Application-wide constants."""

BRAND_NAME = "ThaiKick"
API_VERSION = "1.0.0"

# Weekly recurrence step for private trainer sessions.
PRIVATE_SESSION_INTERVAL_DAYS = 7

# Upper bounds on what one checkout may cover (one row per covered date).
DEFAULT_MAX_BOOKING_DAYS = 365
DEFAULT_MAX_PRIVATE_WEEKS = 52

TIME_FORMAT = "%H:%M"
