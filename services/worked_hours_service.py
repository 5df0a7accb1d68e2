"""
services/worked_hours_service.py
--------------------------------
Business logic for time tracking against clients.

Pricing rule: an entry is priced at the client's rate when it is logged,
and re-priced at the current rate whenever it is edited. Changing a
client's rate alone never changes existing entries. ``touch_entry`` is
the one write that keeps the stored amount.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Optional

from errors import ClientNotFound, InvalidInput
from models.client import Client
from models.worked_hours import (
    ClientHoursSummary,
    DayGroup,
    MonthlyClientReport,
    ReportPeriod,
    WorkedHourEntry,
    WorkedHoursMonthlySummary,
)
from repositories.client_repo import ClientRepository
from repositories.worked_hours_repo import WorkedHoursRepository
from utils.dates import DateRange, italian_month_label, parse_date
from utils.logger import get_logger
from utils.money import ZERO, money_sum, round2, to_decimal

logger = get_logger(__name__)

_UNSET = object()
MAX_HOURS = Decimal("999.99")


class WorkedHoursService:
    """Logs, edits, deletes and reports worked hours."""

    def __init__(self, worked_hours_repo=None, client_repo=None):
        self.repo = worked_hours_repo or WorkedHoursRepository()
        self.client_repo = client_repo or ClientRepository()

    # ── WRITE ─────────────────────────────────────────────

    def log_hours(
        self,
        client_id: int,
        worked_date,
        hours,
        note: Optional[str] = None,
    ) -> WorkedHourEntry:
        """
        Log hours for a client, priced at the client's current rate.

        Args:
            client_id: Client primary key.
            worked_date: ``date`` or ``YYYY-MM-DD``.
            hours: Positive number of hours.
            note: Optional description of the work.

        Returns:
            The persisted entry.

        Raises:
            InvalidInput: bad client id, date or hours.
            ClientNotFound: the client does not exist.
        """
        client = self._client(client_id)
        day = parse_date(worked_date, "worked_date")
        hours = self._hours(hours)

        entry = WorkedHourEntry(
            client_id=client.id,
            client_name=client.name,
            worked_date=day,
            hours=hours,
            amount_cached=self._price(hours, client),
            note=_clean_note(note),
        )
        saved = self.repo.insert(entry)
        logger.info(
            f"Logged {saved.hours}h for {client.name} on {day} = {saved.amount_cached}"
        )
        return saved

    def edit_entry(
        self,
        entry_id: int,
        client_id: Optional[int] = None,
        worked_date=None,
        hours=None,
        note=_UNSET,
    ) -> Optional[WorkedHourEntry]:
        """
        Edit an entry and re-price it at the (possibly new) client's
        current rate, even when the hours did not change.

        Returns:
            The updated entry, or None if it does not exist.

        Raises:
            InvalidInput: bad client id, date or hours.
            ClientNotFound: the target client does not exist.
        """
        entry = self.repo.get_by_id(entry_id)
        if entry is None:
            return None

        client = self._client(entry.client_id if client_id is None else client_id)
        if worked_date is not None:
            entry.worked_date = parse_date(worked_date, "worked_date")
        if hours is not None:
            entry.hours = self._hours(hours)
        if note is not _UNSET:
            entry.note = _clean_note(note)

        previous = entry.amount_cached
        entry.client_id = client.id
        entry.client_name = client.name
        entry.amount_cached = self._price(entry.hours, client)
        self.repo.update(entry)
        logger.info(
            f"Edited worked hours #{entry_id}: {previous} -> {entry.amount_cached}"
        )
        return entry

    def touch_entry(self, entry_id: int, note: Optional[str]) -> Optional[WorkedHourEntry]:
        """
        Change only the note; the stored amount is kept as it is.

        Returns:
            The updated entry, or None if it does not exist.
        """
        entry = self.repo.get_by_id(entry_id)
        if entry is None:
            return None
        entry.note = _clean_note(note)
        self.repo.update(entry)
        return entry

    def delete_entry(self, entry_id: int) -> bool:
        """Hard delete. Returns False when nothing matched."""
        return self.repo.delete(entry_id)

    # ── READ ──────────────────────────────────────────────

    def list_clients(self) -> list[Client]:
        return self.client_repo.get_all()

    def list_entries(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        client_id: Optional[int] = None,
    ) -> list[WorkedHourEntry]:
        """Entries newest first, optionally for one month and/or one client."""
        if (year is None) != (month is None):
            raise InvalidInput("Year and month must be given together")
        period = DateRange.for_month(year, month) if year is not None else None
        return self.repo.query(date_range=period, client_id=client_id, newest_first=True)

    def monthly_summary(self, year: int, month: int) -> WorkedHoursMonthlySummary:
        """
        Hours and amount per client for one month, by client name.
        """
        entries = self.repo.query(date_range=DateRange.for_month(year, month))

        by_client: dict[int, list[WorkedHourEntry]] = defaultdict(list)
        for entry in entries:
            by_client[entry.client_id].append(entry)

        clients = [
            ClientHoursSummary(
                client_id=client_id,
                client_name=items[0].client_name or str(client_id),
                hours=round2(sum((e.hours for e in items), ZERO)),
                amount=money_sum(e.amount_cached for e in items),
            )
            for client_id, items in by_client.items()
        ]
        clients.sort(key=lambda c: (c.client_name, c.client_id))

        return WorkedHoursMonthlySummary(
            year=year,
            month=month,
            clients=clients,
            total_hours=round2(sum((c.hours for c in clients), ZERO)),
            total_amount=money_sum(c.amount for c in clients),
        )

    def monthly_client_report(self, year: int, month: int, client_id: int) -> MonthlyClientReport:
        """
        Entries of one client for one month, flat and grouped by day.

        Raises:
            ClientNotFound: the client does not exist.
        """
        client = self._client(client_id)
        period = DateRange.for_month(year, month)
        entries = self.repo.query(date_range=period, client_id=client.id)
        entries.sort(key=lambda e: (e.worked_date, e.id or 0))

        return MonthlyClientReport(
            client_id=client.id,
            client_name=client.name,
            hourly_rate=client.hourly_rate,
            period=ReportPeriod(
                year=year,
                month=month,
                label=italian_month_label(year, month),
                start_date=period.start,
                end_date=period.end,
            ),
            entries=entries,
            grouped_entries=group_by_day(entries),
            total_hours=round2(sum((e.hours for e in entries), ZERO)),
            total_amount=money_sum(e.amount_cached for e in entries),
        )

    # ── HELPERS ───────────────────────────────────────────

    def _client(self, client_id) -> Client:
        if isinstance(client_id, bool) or not isinstance(client_id, int) or client_id <= 0:
            raise InvalidInput(f"Invalid client id: {client_id!r}")
        client = self.client_repo.get_by_id(client_id)
        if client is None:
            raise ClientNotFound(client_id)
        return client

    @staticmethod
    def _hours(value) -> Decimal:
        # Stored as NUMERIC(5,2); priced on the stored value.
        hours = round2(to_decimal(value, "hours"))
        if hours <= 0:
            raise InvalidInput("Hours must be a number greater than zero")
        if hours > MAX_HOURS:
            raise InvalidInput(f"Hours cannot exceed {MAX_HOURS}")
        return hours

    @staticmethod
    def _price(hours: Decimal, client: Client) -> Decimal:
        return round2(hours * client.hourly_rate)


def group_by_day(entries: list[WorkedHourEntry]) -> list[DayGroup]:
    """
    Merge entries sharing a worked_date. Each group keeps its records so
    single entries can still be edited or deleted from the grouped view.
    """
    groups: dict[date, DayGroup] = {}
    for entry in entries:
        group = groups.get(entry.worked_date)
        if group is None:
            group = groups[entry.worked_date] = DayGroup(
                worked_date=entry.worked_date, hours=ZERO, amount=ZERO
            )
        group.hours += entry.hours
        group.amount += entry.amount_cached
        if entry.note and entry.note.strip():
            group.notes.append(entry.note.strip())
        group.records.append(entry)

    ordered = sorted(groups.values(), key=lambda g: g.worked_date)
    for group in ordered:
        group.hours = round2(group.hours)
        group.amount = round2(group.amount)
    return ordered


def _clean_note(note: Optional[str]) -> Optional[str]:
    if note is None:
        return None
    note = str(note).strip()
    return note or None
