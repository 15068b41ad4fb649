"""Shared helpers: telemetry and utilities (no domain logic)."""
