"""Observability for cmdtrace: tracing, telemetry attributes, and logging."""
