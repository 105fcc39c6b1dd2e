"""Prometheus metrics for monitoring scenario analyses and HTTP latency"""

from prometheus_client import Counter, Histogram

# Scenario metrics
scenario_analysis_counter = Counter(
    "finbot_scenario_analysis_total",
    "Total scenario analyses completed",
    ["risk_level"],  # low | medium | high
)

scenario_analysis_failure_counter = Counter(
    "finbot_scenario_analysis_failures_total",
    "Failed scenario analyses",
)

scenario_analysis_duration_histogram = Histogram(
    "finbot_scenario_analysis_duration_seconds",
    "Scenario analysis duration including store round-trips",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_scenario_analysis(risk_level: str, duration_seconds: float) -> None:
    """Record outcome distribution and latency of a completed analysis"""
    scenario_analysis_counter.labels(risk_level=risk_level).inc()
    scenario_analysis_duration_histogram.observe(duration_seconds)
