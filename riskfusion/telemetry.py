"""
Fusion telemetry.

Counts and numbers only. Risk titles, descriptions and contract text
never leave the process through telemetry.
"""
import os
import logging
from typing import Literal

from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

logger = logging.getLogger("riskfusion.telemetry")


def init_telemetry():
    """
    Initialize Azure Application Insights via OpenTelemetry.
    No-op unless AZURE_APPINSIGHTS_CONNECTION_STRING is set.
    """
    connection_string = os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING")

    if not connection_string:
        return  # Telemetry disabled (local / tests)

    configure_azure_monitor(
        connection_string=connection_string
    )
    logger.info("Azure Monitor telemetry configured")


def emit_fusion_telemetry(
    fusion_latency_ms: int,
    model_risk_count: int,
    removed_count: int,
    similarity_threshold: float,
):
    """
    Emit a single telemetry event per fusion call.

    The attribute set is locked: no kwargs, no payloads.
    """
    assert isinstance(fusion_latency_ms, int), "fusion_latency_ms must be int"
    assert isinstance(model_risk_count, int), "model_risk_count must be int"
    assert isinstance(removed_count, int), "removed_count must be int"
    assert isinstance(similarity_threshold, float), "similarity_threshold must be float"

    span = get_current_span()
    if not span or not span.is_recording():
        return  # No active span - telemetry disabled or not in trace context

    span.add_event(
        name="riskfusion.fusion",
        attributes={
            "fusion_latency_ms": fusion_latency_ms,
            "model_risk_count": model_risk_count,
            "removed_count": removed_count,
            "similarity_threshold": similarity_threshold,
        }
    )


def emit_override_telemetry(outcome: Literal["restored", "rejected", "disabled"]):
    """
    Emit the outcome of a manual override request (categorical only).
    """
    assert outcome in ("restored", "rejected", "disabled"), (
        f"outcome must be one of ('restored', 'rejected', 'disabled'), got {outcome}"
    )

    span = get_current_span()
    if not span or not span.is_recording():
        return

    span.add_event(
        name="riskfusion.override",
        attributes={
            "override_outcome": outcome,
        }
    )


def emit_exception_telemetry(exception: Exception):
    """
    Emit exception type only (no message, no stack trace).
    """
    span = get_current_span()
    if not span or not span.is_recording():
        return

    span.add_event(
        name="riskfusion.exception",
        attributes={
            "exception_type": type(exception).__name__
        }
    )
