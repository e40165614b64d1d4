"""Utility modules for Lucro ML."""

from .demo_data import generate_demo_data
from .export import Exporter
from .formatters import format_currency, format_percent, get_month_name

__all__ = [
    "generate_demo_data",
    "Exporter",
    "format_currency",
    "format_percent",
    "get_month_name",
]
