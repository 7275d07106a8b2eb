# -*- coding: utf-8 -*-
"""Logging setup (structlog, optional Logfire)."""

from battery_deal_tracker.logging.config import configure_logging

__all__ = ["configure_logging"]
