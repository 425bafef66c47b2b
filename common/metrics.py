"""
Prometheus metrics for message generation.

This module does NOT start an HTTP server. Applications embedding the
builder expose the default registry the way they already do, e.g.:

    from prometheus_client import make_asgi_app
    app.mount("/metrics", make_asgi_app())
"""
from __future__ import annotations

from typing import Any, Dict, Tuple, Type

from prometheus_client import Counter

# ----------------------------
# Registration helper (avoid duplicate collectors)
# ----------------------------
_METRICS: Dict[Tuple[Type[Any], str], Any] = {}


def get_metric(cls: Type[Any], name: str, *args, **kwargs):
    key = (cls, name)
    if key in _METRICS:
        return _METRICS[key]
    metric = cls(name, *args, **kwargs)
    _METRICS[key] = metric
    return metric


# ----------------------------
# Project metrics
# ----------------------------

transactions_added_total = get_metric(
    Counter,
    "sepa_transactions_added_total",
    "Direct debit transactions accepted into a message",
)

transactions_rejected_total = get_metric(
    Counter,
    "sepa_transactions_rejected_total",
    "Direct debit transactions rejected by field validation",
)

messages_rendered_total = get_metric(
    Counter,
    "sepa_messages_rendered_total",
    "pain.008 documents rendered",
    ["schema"],
)

render_failures_total = get_metric(
    Counter,
    "sepa_render_failures_total",
    "pain.008 renders aborted by whole-message validation",
    ["schema", "reason"],
)
