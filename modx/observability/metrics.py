"""Prometheus metrics for module resolution and startup."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

resolutions_total = Counter(
    "modx_resolutions_total",
    "Startup order resolutions by outcome",
    ["outcome"],
)
duplicate_modules_total = Counter(
    "modx_duplicate_modules_total",
    "Module definitions dropped because the name was already seen",
)
start_hook_latency_ms = Histogram(
    "modx_start_hook_latency_ms",
    "Time spent in module start hooks",
    ["module"],
    buckets=(1, 5, 10, 50, 100, 500, 1000, 5000),
)
