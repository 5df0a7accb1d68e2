"""
services/ - Business Logic Layer
================================
Tax computation, period aggregation, the overdue sweep, worked-hours
pricing and reports, and the dashboard views composed from them.
Services receive repositories in their constructor and never run SQL.
"""
