"""
handlers/export_handler.py
---------------------------
Handles timesheet export commands (CSV, Excel).
Delegates to ExportService.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import ledger_errors, parse_int, parse_month_year
from services.export_service import ExportService
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)
export_service = ExportService()


@authorized_only
@rate_limited
@ledger_errors("/export_csv <id_cliente> [mese] [anno]")
async def export_csv_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /export_csv command - send a client's month of hours as CSV.
    Example: /export_csv 3 10 2026 (October 2026).
    """
    args = context.args or []
    if not args:
        await update.message.reply_text("⚠️ Uso: /export_csv <id_cliente> [mese] [anno]")
        return

    client_id = parse_int(args[0], "L'id cliente")
    year, month = parse_month_year(args[1:])

    await update.message.reply_text("📄 Sto preparando il file CSV...")

    buffer = export_service.export_month_csv(client_id, year, month)
    await update.message.reply_document(
        document=buffer,
        filename=f"ore_{client_id}_{year}_{month:02d}.csv",
        caption=f"📊 Ore {month:02d}/{year} - CSV",
    )


@authorized_only
@rate_limited
@ledger_errors("/export_excel <id_cliente> [mese] [anno]")
async def export_excel_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /export_excel command - send a client's month of hours as Excel.
    Example: /export_excel 3 10 2026 (October 2026).
    """
    args = context.args or []
    if not args:
        await update.message.reply_text("⚠️ Uso: /export_excel <id_cliente> [mese] [anno]")
        return

    client_id = parse_int(args[0], "L'id cliente")
    year, month = parse_month_year(args[1:])

    await update.message.reply_text("📊 Sto preparando il file Excel...")

    buffer = export_service.export_month_excel(client_id, year, month)
    await update.message.reply_document(
        document=buffer,
        filename=f"ore_{client_id}_{year}_{month:02d}.xlsx",
        caption=f"📊 Ore {month:02d}/{year} - Excel",
    )
