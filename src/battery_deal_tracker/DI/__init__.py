# -*- coding: utf-8 -*-
"""Dependency injection."""

from battery_deal_tracker.DI.container import Container

__all__ = ["Container"]
