# -*- coding: utf-8 -*-
"""Utility modules."""

from battery_deal_tracker.utils.debounce import Debouncer

__all__ = ["Debouncer"]
