"""
handlers/dashboard_handler.py
------------------------------
Handles the dashboard commands: /summary, /month, /overview, /series,
/limit and /categories.
Delegates all figures to DashboardService.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import (
    STATUS_ICONS,
    breakdown_of,
    format_breakdown,
    ledger_errors,
    parse_int,
    parse_month_year,
    progress_bar,
)
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from services.dashboard_service import DashboardService
from utils.dates import italian_month_label
from utils.logger import get_logger
from utils.money import format_eur

logger = get_logger(__name__)
dashboard_service = DashboardService()


@authorized_only
@rate_limited
@ledger_errors("/summary")
async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /summary command - all-time figures on paid invoices."""
    s = dashboard_service.get_summary()
    lines = [
        "📊 Riepilogo generale\n",
        f"💶 Incassato: {format_eur(s.total_income)} ({s.invoice_count} fatture)",
        f"🧾 IVA incassata: {format_eur(s.total_vat)}",
        f"💸 Spese: {format_eur(s.total_expenses)} ({s.expense_count})",
        "",
        *format_breakdown(breakdown_of(s)),
        "",
        f"✅ Netto: {format_eur(s.net_income)}",
        f"⏳ Da incassare: {format_eur(s.pending_invoices)}",
        f"⚠️ Scadute: {format_eur(s.overdue_invoices)}",
    ]
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/month")
async def month_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /month command - estimate for the current month."""
    e = dashboard_service.get_monthly_estimate()
    lines = [
        f"📅 Stima del mese {e.month}\n",
        f"💶 Incassato: {format_eur(e.total_income)}",
        f"🧾 Fatture emesse: {e.invoice_count}",
        f"💸 Spese: {format_eur(e.total_expenses)} ({e.expense_count})",
        "",
        *format_breakdown(breakdown_of(e)),
        "",
        f"✅ Netto: {format_eur(e.net_income)}",
    ]
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/overview [mese] [anno] [stipendio]")
async def overview_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /overview command - any month, with optional target salary.

    Usage:
        /overview              → current month
        /overview 3            → March this year
        /overview 3 2026 2500  → March 2026, target 2500
    """
    args = context.args or []
    year, month = parse_month_year(args[:2])
    target = args[2] if len(args) >= 3 else None

    o = dashboard_service.get_monthly_overview(year, month, target_salary=target)
    lines = [
        f"🗓️ {italian_month_label(o.year, o.month).capitalize()}\n",
        f"💶 Incassato: {format_eur(o.total_income)}",
        f"🧾 Fatture emesse: {o.invoice_count}",
        f"💸 Spese: {format_eur(o.total_expenses)}",
        "",
        *format_breakdown(breakdown_of(o)),
        "",
        f"✅ Netto: {format_eur(o.net_income)}",
        f"🎯 Obiettivo: {format_eur(o.target_salary)}",
        f"🏦 Risparmio: {format_eur(o.savings)}",
    ]
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/series [mesi]")
async def series_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /series command - month by month income, expenses and net."""
    months = parse_int(context.args[0], "Il numero di mesi") if context.args else 6
    points = dashboard_service.get_income_expense_series(months)

    lines = [f"📈 Ultimi {len(points)} mesi\n"]
    for p in points:
        lines.append(
            f"{p.month}: +{format_eur(p.income)} / -{format_eur(p.expenses)} "
            f"/ tasse {format_eur(p.tax)} → {format_eur(p.net)}"
        )
    await update.message.reply_text("\n".join(lines))


@authorized_only
@rate_limited
@ledger_errors("/limit [anno]")
async def limit_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /limit command - progress towards the annual revenue ceiling."""
    year = parse_int(context.args[0], "L'anno") if context.args else None
    s = dashboard_service.get_annual_limit_status(year)

    await update.message.reply_text(
        f"{STATUS_ICONS[s.status]} Limite ricavi {s.year}\n\n"
        f"Fatturato: {format_eur(s.total_invoiced)} / {format_eur(s.limit)}\n"
        f"{progress_bar(s.percentage_used)} {s.percentage_used}%\n"
        f"Residuo: {format_eur(s.remaining)}\n"
        f"Fatture pagate: {s.invoice_count}",
    )


@authorized_only
@rate_limited
@ledger_errors("/categories")
async def categories_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /categories command - expenses grouped by category."""
    categories = dashboard_service.get_expense_by_category()
    if not categories:
        await update.message.reply_text("📭 Nessuna spesa registrata.")
        return

    lines = ["🏷️ Spese per categoria\n"]
    for c in categories:
        lines.append(
            f"• {c.category_name}: {format_eur(c.total_amount)} "
            f"({c.percentage}%, {c.expense_count})"
        )
    await update.message.reply_text("\n".join(lines))
