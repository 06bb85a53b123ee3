"""Prometheus metrics for monitoring."""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# HTTP Request metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_in_progress = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests in progress",
    ["method", "endpoint"],
)

# Business metrics
reorder_plans_computed_total = Counter(
    "reorder_plans_computed_total",
    "Total reorder plans computed",
    ["status"],  # critical, warning, safe, overstocked, unknown
)

inventory_exports_total = Counter(
    "inventory_exports_total",
    "Total inventory plan exports",
    ["format"],  # csv, xlsx
)

ai_queries_routed_total = Counter(
    "ai_queries_routed_total",
    "Total AI chat queries routed",
    ["model"],  # haiku, opus
)

# System metrics
app_info = Gauge(
    "app_info",
    "Application information",
    ["version", "environment"],
)

app_uptime_seconds = Gauge(
    "app_uptime_seconds",
    "Application uptime in seconds",
)
