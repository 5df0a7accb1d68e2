"""
models/worked_hours.py
----------------------
Logged billable time and the report shapes built from it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from utils.money import to_decimal


@dataclass
class WorkedHourEntry:
    """
    Hours worked for a client on one day.

    ``amount_cached`` is priced when the entry is logged or edited and is
    not touched when the client's rate changes later.
    """
    client_id: int
    worked_date: date
    hours: Decimal
    amount_cached: Decimal
    note: Optional[str] = None
    client_name: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.hours = to_decimal(self.hours, "hours")
        self.amount_cached = to_decimal(self.amount_cached, "amount_cached")


@dataclass(frozen=True)
class ClientHoursSummary:
    client_id: int
    client_name: str
    hours: Decimal
    amount: Decimal


@dataclass(frozen=True)
class WorkedHoursMonthlySummary:
    year: int
    month: int
    clients: list[ClientHoursSummary]
    total_hours: Decimal
    total_amount: Decimal


@dataclass
class DayGroup:
    """All entries of one day merged, keeping the original records."""
    worked_date: date
    hours: Decimal
    amount: Decimal
    notes: list[str] = field(default_factory=list)
    records: list[WorkedHourEntry] = field(default_factory=list)


@dataclass(frozen=True)
class ReportPeriod:
    year: int
    month: int
    label: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class MonthlyClientReport:
    client_id: int
    client_name: str
    hourly_rate: Decimal
    period: ReportPeriod
    entries: list[WorkedHourEntry]
    grouped_entries: list[DayGroup]
    total_hours: Decimal
    total_amount: Decimal
