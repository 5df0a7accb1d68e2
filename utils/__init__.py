"""
utils/ - Shared helpers: logging, Decimal money rounding, date periods.
"""
