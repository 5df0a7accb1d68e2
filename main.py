"""
main.py
-------
Entry point for the forfettario Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.start_handler import start_command, help_command, myid_command
from handlers.dashboard_handler import (
    summary_command,
    month_command,
    overview_command,
    series_command,
    limit_command,
    categories_command,
)
from handlers.worked_hours_handler import (
    clients_command,
    log_command,
    hours_command,
    report_command,
    edit_hours_command,
    note_hours_command,
    delete_hours_command,
)
from handlers.chart_handler import chart_command
from handlers.export_handler import export_csv_command, export_excel_command
from utils.logger import get_logger

logger = get_logger(__name__)

COMMANDS = [
    ("start", start_command, "🚀 Avvia il bot"),
    ("help", help_command, "📖 Aiuto"),
    ("summary", summary_command, "📊 Riepilogo generale"),
    ("month", month_command, "📅 Stima del mese"),
    ("overview", overview_command, "🗓️ Mese a scelta"),
    ("series", series_command, "📈 Andamento mensile"),
    ("limit", limit_command, "🚦 Limite ricavi annuale"),
    ("categories", categories_command, "🏷️ Spese per categoria"),
    ("chart", chart_command, "📊 Grafici"),
    ("clients", clients_command, "👥 Clienti"),
    ("log", log_command, "⏱️ Registra ore"),
    ("hours", hours_command, "🕒 Ore del mese"),
    ("report", report_command, "📋 Dettaglio cliente"),
    ("edit_hours", edit_hours_command, "✏️ Modifica ore"),
    ("note_hours", note_hours_command, "📝 Modifica nota"),
    ("delete_hours", delete_hours_command, "🗑️ Elimina ore"),
    ("export_csv", export_csv_command, "📄 Esporta CSV"),
    ("export_excel", export_excel_command, "📊 Esporta Excel"),
    ("myid", myid_command, "🆔 Il tuo ID"),
]


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    await application.bot.set_my_commands(
        [BotCommand(name, description) for name, _, description in COMMANDS]
    )
    logger.info("Bot commands menu registered successfully.")


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    # ── 3. Register command handlers ──────────────────────
    for name, callback, _ in COMMANDS:
        app.add_handler(CommandHandler(name, callback))

    # ── 4. Start polling ──────────────────────────────────
    logger.info("🚀 Forfettario bot is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 5. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("Forfettario bot stopped.")


if __name__ == "__main__":
    main()
