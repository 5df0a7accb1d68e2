"""
services/export_service.py
---------------------------
Generates CSV and Excel exports of a client's monthly worked hours.
"""

import io

import pandas as pd

from models.worked_hours import MonthlyClientReport
from services.worked_hours_service import WorkedHoursService
from utils.logger import get_logger

logger = get_logger(__name__)


class ExportService:
    """Builds downloadable timesheets from the monthly client report."""

    def __init__(self, worked_hours_service=None):
        self.worked_hours = worked_hours_service or WorkedHoursService()

    def export_month_csv(self, client_id: int, year: int, month: int) -> io.BytesIO:
        """
        Export a client's month of worked hours as a CSV file.

        Args:
            client_id: Client primary key.
            year: Year number.
            month: Month number (1-12).

        Returns:
            A BytesIO buffer containing the CSV data, one row per entry.

        Raises:
            ClientNotFound: the client does not exist.
        """
        report = self.worked_hours.monthly_client_report(year, month, client_id)
        df = entries_frame(report)

        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8-sig")
        buffer.seek(0)
        logger.info(
            f"Exported {len(report.entries)} worked hours as CSV for {report.client_name}, "
            f"{report.period.label}"
        )
        return buffer

    def export_month_excel(self, client_id: int, year: int, month: int) -> io.BytesIO:
        """
        Export a client's month of worked hours as an Excel (.xlsx) file
        with an entries sheet and a per-day sheet.

        Raises:
            ClientNotFound: the client does not exist.
        """
        report = self.worked_hours.monthly_client_report(year, month, client_id)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            entries_frame(report).to_excel(writer, sheet_name="Registro", index=False)
            days_frame(report).to_excel(writer, sheet_name="Per giorno", index=False)

        buffer.seek(0)
        logger.info(
            f"Exported {len(report.entries)} worked hours as Excel for {report.client_name}, "
            f"{report.period.label}"
        )
        return buffer


def entries_frame(report: MonthlyClientReport) -> pd.DataFrame:
    """One row per entry plus a closing total row."""
    rows = [
        {
            "Data": e.worked_date.isoformat(),
            "Cliente": report.client_name,
            "Ore": float(e.hours),
            "Importo": float(e.amount_cached),
            "Note": e.note or "",
        }
        for e in report.entries
    ]
    rows.append({
        "Data": "Totale",
        "Cliente": report.client_name,
        "Ore": float(report.total_hours),
        "Importo": float(report.total_amount),
        "Note": report.period.label,
    })
    return pd.DataFrame(rows, columns=["Data", "Cliente", "Ore", "Importo", "Note"])


def days_frame(report: MonthlyClientReport) -> pd.DataFrame:
    rows = [
        {
            "Data": g.worked_date.isoformat(),
            "Ore": float(g.hours),
            "Importo": float(g.amount),
            "Voci": len(g.records),
            "Note": "; ".join(g.notes),
        }
        for g in report.grouped_entries
    ]
    return pd.DataFrame(rows, columns=["Data", "Ore", "Importo", "Voci", "Note"])
