"""
handlers/common.py
------------------
Argument parsing, error replies and message formatting shared by the
command handlers.
"""

from datetime import date
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from errors import ClientNotFound, InvalidInput, LedgerError
from models.reports import LimitStatus, TaxBreakdown
from utils.dates import parse_date
from utils.logger import get_logger
from utils.money import format_eur

logger = get_logger(__name__)

STATUS_ICONS = {
    LimitStatus.SAFE: "🟢",
    LimitStatus.ATTENTION: "🟡",
    LimitStatus.CRITICAL: "🔴",
}


def ledger_errors(usage: str):
    """
    Decorator that turns ledger exceptions into replies.

    Bad input gets the error plus the command usage, an unknown client
    gets a short notice, any other LedgerError is logged and reported
    as a failure.
    """
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
            try:
                return await func(update, context, *args, **kwargs)
            except InvalidInput as e:
                await update.message.reply_text(f"⚠️ {e}\nUso: {usage}")
            except ClientNotFound as e:
                await update.message.reply_text(f"🔍 Cliente {e.client_id} non trovato.")
            except LedgerError as e:
                logger.error(f"{func.__name__} failed: {e}")
                await update.message.reply_text("❌ Si è verificato un problema. Riprova più tardi.")
        return wrapper
    return decorator


# ── ARGUMENTS ─────────────────────────────────────────────

def parse_int(value: str, field: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidInput(f"{field} deve essere un numero intero") from None


def parse_month_year(args: list[str], today: date | None = None) -> tuple[int, int]:
    """``[]`` -> current month, ``[month]`` -> that month this year, ``[month, year]``."""
    today = today or date.today()
    if not args:
        return today.year, today.month
    month = parse_int(args[0], "Il mese")
    year = parse_int(args[1], "L'anno") if len(args) >= 2 else today.year
    return year, month


def parse_key_values(args: list[str]) -> dict[str, str]:
    """``["hours=3", "note=call", "cliente"]`` -> pairs; bare words are rejected."""
    pairs = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise InvalidInput(f"Parametro non valido: {arg}")
        pairs[key.strip().lower()] = value.strip()
    return pairs


def split_date_and_note(args: list[str], default: date) -> tuple[date, str | None]:
    """A leading ISO date is the worked day; everything else is the note."""
    if args:
        try:
            return parse_date(args[0]), " ".join(args[1:]) or None
        except InvalidInput:
            pass
    return default, " ".join(args) or None


# ── FORMATTING ────────────────────────────────────────────

def format_breakdown(breakdown: TaxBreakdown) -> list[str]:
    return [
        f"  Imponibile: {format_eur(breakdown.taxable_income)}",
        f"  INPS: {format_eur(breakdown.health_insurance)}",
        f"  Base imposta: {format_eur(breakdown.income_for_tax)}",
        f"  Imposta sostitutiva: {format_eur(breakdown.income_tax)}",
        f"  Totale tasse: {format_eur(breakdown.total_tax_burden)}",
    ]


def breakdown_of(view) -> TaxBreakdown:
    """Pick the tax lines out of any dashboard view."""
    return TaxBreakdown(
        taxable_income=view.taxable_income,
        health_insurance=view.health_insurance,
        income_for_tax=view.income_for_tax,
        income_tax=view.income_tax,
        total_tax_burden=view.total_tax_burden,
    )


def progress_bar(pct, length: int = 15) -> str:
    """Generate a text progress bar."""
    filled = int(min(float(pct), 100) / 100 * length)
    return "█" * filled + "░" * (length - filled)
