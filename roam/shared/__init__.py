"""Shared cross-cutting utilities: telemetry (logging, tracing) and helpers."""
