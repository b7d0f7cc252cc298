"""Prometheus counters for action dispatch."""

from prometheus_client import Counter

ACTION_CALLS = Counter(
    "radflux_action_calls_total",
    "Total number of action calls on declared actions",
    ["action", "mode"],
)

ACTION_PUBLISHES = Counter(
    "radflux_action_publishes_total",
    "Total number of publish cycles started for declared actions",
    ["action"],
)

SUBSCRIBER_ERRORS = Counter(
    "radflux_subscriber_errors_total",
    "Total number of subscriber callbacks that raised during publish",
    ["action"],
)
