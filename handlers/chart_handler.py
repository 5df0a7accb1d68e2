"""
handlers/chart_handler.py
--------------------------
Handles chart generation commands.
Delegates to ChartService and sends images to the user.
"""

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import ledger_errors, parse_int
from services.chart_service import ChartService
from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)
chart_service = ChartService()


@authorized_only
@rate_limited
@ledger_errors("/chart [mesi]")
async def chart_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /chart command - income/expense bars plus the category pie.

    Usage:
        /chart     → last 6 months
        /chart 12  → last 12 months
    """
    months = parse_int(context.args[0], "Il numero di mesi") if context.args else 6

    await update.message.reply_text("📊 Sto preparando i grafici...")

    series = chart_service.generate_series_bar(months)
    if series:
        await update.message.reply_photo(photo=series, caption=f"📈 Entrate e spese, ultimi {months} mesi")
    else:
        await update.message.reply_text("📭 Nessun movimento nel periodo.")

    pie = chart_service.generate_category_pie()
    if pie:
        await update.message.reply_photo(photo=pie, caption="📊 Spese per categoria")
