"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Key metrics
keys_issued_total = Counter(
    "keys_issued_total",
    "Total license keys issued",
    ["game"],
)

keys_revoked_total = Counter(
    "keys_revoked_total",
    "Total license keys revoked",
)

keys_reset_total = Counter(
    "keys_reset_total",
    "Total license keys reset",
)

key_verifications_total = Counter(
    "key_verifications_total",
    "Total key verifications by outcome",
    ["reason"],
)

# Reseller metrics
credits_added_total = Counter(
    "credits_added_total",
    "Total credits granted to resellers",
)

resellers_registered_total = Counter(
    "resellers_registered_total",
    "Total resellers registered through referral tokens",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
