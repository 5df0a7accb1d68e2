"""
security/auth.py
-----------------
Whitelist check for the Telegram bot. The books belong to one
freelancer, so every command is limited to ALLOWED_USER_IDS.
"""

from functools import wraps
from typing import Callable, Iterable

from telegram import Update
from telegram.ext import ContextTypes

from config import ALLOWED_USER_IDS
from utils.logger import get_logger

logger = get_logger(__name__)


def is_allowed(user_id: int, allowed: Iterable[int] = ALLOWED_USER_IDS) -> bool:
    """An empty whitelist lets everyone in (first run, before /myid)."""
    allowed = set(allowed)
    return not allowed or user_id in allowed


def authorized_only(func: Callable):
    """
    Decorator that answers only whitelisted users.

    Usage:
        @authorized_only
        async def my_handler(update, context):
            ...
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not is_allowed(user.id):
            logger.warning(
                f"🚫 Unauthorized command {func.__name__}: user_id={user.id}, "
                f"username={user.username}"
            )
            await update.message.reply_text("⛔ Spiacente, questo bot è privato.")
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
