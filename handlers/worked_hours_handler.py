"""
handlers/worked_hours_handler.py
---------------------------------
Handles time tracking commands: /clients, /log, /hours, /report,
/edit_hours, /note_hours and /delete_hours.
Delegates all logic to WorkedHoursService.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import (
    ledger_errors,
    parse_int,
    parse_key_values,
    parse_month_year,
    split_date_and_note,
)
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from services.worked_hours_service import WorkedHoursService
from utils.dates import italian_month_label
from utils.logger import get_logger
from utils.money import format_eur

logger = get_logger(__name__)
worked_hours_service = WorkedHoursService()

_EDIT_KEYS = {"client": "client_id", "date": "worked_date", "hours": "hours", "note": "note"}


def _format_entry(entry) -> str:
    note = f" - {entry.note}" if entry.note else ""
    return (
        f"#{entry.id} {entry.worked_date.isoformat()} {entry.client_name or entry.client_id}: "
        f"{entry.hours}h = {format_eur(entry.amount_cached)}{note}"
    )


@authorized_only
@rate_limited
@ledger_errors("/clients")
async def clients_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /clients command - list clients with their ids and rates."""
    clients = worked_hours_service.list_clients()
    if not clients:
        await update.message.reply_text("📭 Nessun cliente registrato.")
        return
    lines = ["👥 Clienti\n"]
    lines += [f"{c.id}. {c.name} - {format_eur(c.hourly_rate)}/h" for c in clients]
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/log <id_cliente> <ore> [AAAA-MM-GG] [nota]")
async def log_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /log command - record worked hours.

    Usage:
        /log 3 4.5                       → today
        /log 3 4.5 2026-10-02 Sviluppo   → given day, with a note
    """
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text("⚠️ Uso: /log <id_cliente> <ore> [AAAA-MM-GG] [nota]")
        return

    client_id = parse_int(args[0], "L'id cliente")
    worked_date, note = split_date_and_note(args[2:], update.message.date.date())

    entry = worked_hours_service.log_hours(client_id, worked_date, args[1], note=note)
    await update.message.reply_text(f"✅ Registrato:\n{_format_entry(entry)}")


@authorized_only
@rate_limited
@ledger_errors("/hours [mese] [anno]")
async def hours_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /hours command - hours per client for a month."""
    year, month = parse_month_year(context.args or [])
    summary = worked_hours_service.monthly_summary(year, month)

    if not summary.clients:
        await update.message.reply_text(
            f"📭 Nessuna ora registrata a {italian_month_label(year, month)}."
        )
        return

    lines = [f"⏱️ Ore di {italian_month_label(year, month)}\n"]
    for c in summary.clients:
        lines.append(f"• {c.client_name}: {c.hours}h = {format_eur(c.amount)}")
    lines.append(f"\nTotale: {summary.total_hours}h = {format_eur(summary.total_amount)}")
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/report <id_cliente> [mese] [anno]")
async def report_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /report command - one client's month grouped by day."""
    args = context.args or []
    if not args:
        await update.message.reply_text("⚠️ Uso: /report <id_cliente> [mese] [anno]")
        return

    client_id = parse_int(args[0], "L'id cliente")
    year, month = parse_month_year(args[1:])
    report = worked_hours_service.monthly_client_report(year, month, client_id)

    lines = [
        f"📋 {report.client_name} - {report.period.label}",
        f"Tariffa: {format_eur(report.hourly_rate)}/h\n",
    ]
    for group in report.grouped_entries:
        notes = f" ({'; '.join(group.notes)})" if group.notes else ""
        ids = ",".join(f"#{r.id}" for r in group.records)
        lines.append(
            f"{group.worked_date.strftime('%d/%m')}: {group.hours}h = "
            f"{format_eur(group.amount)}{notes} [{ids}]"
        )
    if not report.grouped_entries:
        lines.append("Nessuna ora registrata.")
    lines.append(f"\nTotale: {report.total_hours}h = {format_eur(report.total_amount)}")
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/edit_hours <id> [client=ID] [date=AAAA-MM-GG] [hours=N] [note=testo]")
async def edit_hours_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /edit_hours command - change an entry and re-price it at the
    client's current rate.

    Usage:
        /edit_hours 12 hours=3
        /edit_hours 12 client=4 date=2026-10-03
    """
    args = context.args or []
    if not args:
        await update.message.reply_text(
            "⚠️ Uso: /edit_hours <id> [client=ID] [date=AAAA-MM-GG] [hours=N] [note=testo]"
        )
        return

    entry_id = parse_int(args[0], "L'id")
    changes = {}
    for key, value in parse_key_values(args[1:]).items():
        if key not in _EDIT_KEYS:
            await update.message.reply_text(f"⚠️ Campo sconosciuto: {key}")
            return
        changes[_EDIT_KEYS[key]] = value
    if "client_id" in changes:
        changes["client_id"] = parse_int(changes["client_id"], "L'id cliente")

    entry = worked_hours_service.edit_entry(entry_id, **changes)
    if entry is None:
        await update.message.reply_text(f"🔍 Voce #{entry_id} non trovata.")
        return
    await update.message.reply_text(f"✏️ Aggiornato:\n{_format_entry(entry)}")


@authorized_only
@rate_limited
@ledger_errors("/note_hours <id> <nota>")
async def note_hours_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /note_hours command - change only the note, keeping the amount."""
    args = context.args or []
    if not args:
        await update.message.reply_text("⚠️ Uso: /note_hours <id> <nota>")
        return

    entry_id = parse_int(args[0], "L'id")
    entry = worked_hours_service.touch_entry(entry_id, " ".join(args[1:]) or None)
    if entry is None:
        await update.message.reply_text(f"🔍 Voce #{entry_id} non trovata.")
        return
    await update.message.reply_text(f"📝 Nota aggiornata:\n{_format_entry(entry)}")


@authorized_only
@rate_limited
@ledger_errors("/delete_hours <id>")
async def delete_hours_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_hours command - remove an entry."""
    if not context.args:
        await update.message.reply_text("⚠️ Uso: /delete_hours <id>")
        return

    entry_id = parse_int(context.args[0], "L'id")
    if worked_hours_service.delete_entry(entry_id):
        await update.message.reply_text(f"🗑️ Voce #{entry_id} eliminata.")
    else:
        await update.message.reply_text(f"🔍 Voce #{entry_id} non trovata.")
