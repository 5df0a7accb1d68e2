"""
handlers/start_handler.py
--------------------------
Handles /start, /help and /myid commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from security.auth import authorized_only
from security.rate_limiter import rate_limited
from utils.logger import get_logger

logger = get_logger(__name__)

HELP_TEXT = """
🤖 *Benvenuto nel tuo contabile forfettario!*
Entrate, tasse e ore lavorate in un colpo d'occhio 💶

*📊 Cruscotto:*
/summary - riepilogo generale
/month - stima del mese corrente
/overview - mese a scelta (es. /overview 3 2026 2500)
/series - andamento ultimi mesi (es. /series 12)
/limit - limite ricavi annuale
/categories - spese per categoria
/chart - grafici

*⏱️ Ore lavorate:*
/clients - elenco clienti
/log - registra ore (es. /log 3 4.5 2026-10-02 Sviluppo)
/hours - ore del mese per cliente
/report - dettaglio cliente (es. /report 3 10 2026)
/edit\\_hours - modifica voce (es. /edit\\_hours 12 hours=3)
/note\\_hours - cambia solo la nota
/delete\\_hours - elimina voce

*📄 Esportazioni:*
/export\\_csv - ore cliente in CSV
/export\\_excel - ore cliente in Excel

/myid - il tuo Telegram ID
"""


@authorized_only
@rate_limited
async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    user = update.effective_user
    logger.info(f"User {user.id} ({user.first_name}) started the bot.")

    await update.message.reply_text(
        f"Ciao {user.first_name}! 👋\n"
        f"Tengo i conti del tuo regime forfettario.\n\n"
        f"Scrivi /help per vedere tutti i comandi.",
    )


@authorized_only
@rate_limited
async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")


@authorized_only
async def myid_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /myid command - show user's Telegram ID for whitelisting."""
    user = update.effective_user
    await update.message.reply_text(
        f"🆔 Il tuo ID: `{user.id}`\n"
        f"Aggiungilo a `ALLOWED_USER_IDS` nel file `.env` per proteggere il bot.",
        parse_mode="Markdown",
    )
