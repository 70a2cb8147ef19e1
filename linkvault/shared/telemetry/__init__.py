"""Telemetry: logging setup."""

from linkvault.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
