"""
Console output formatting.
"""

from business_day_calculator.output.formatter import ConsoleFormatter

__all__ = ["ConsoleFormatter"]
