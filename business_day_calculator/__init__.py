"""
Business Day Calculator - add business days to a date, skipping weekends and national holidays.
"""

__version__ = "0.1.0"
