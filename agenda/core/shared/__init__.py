"""
Shared utilities module

This module provides common utilities used across the entire application.
All utilities are domain-agnostic and reusable.
"""

from .formatters import DateFormatter
from .logger import JSONFormatter, configure_logging

__all__ = [
    "DateFormatter",
    "JSONFormatter",
    "configure_logging",
]
