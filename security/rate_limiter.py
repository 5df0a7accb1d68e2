"""
security/rate_limiter.py
-------------------------
Sliding-window rate limit per Telegram user.
Dashboard commands hit the database several times each, so a burst of
commands is refused before it reaches a service.
"""

import time
from collections import defaultdict, deque
from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    At most ``max_calls`` accepted calls per user in any ``window``
    seconds. Refused calls do not count.
    """

    def __init__(self, max_calls: int = RATE_LIMIT_MESSAGES, window: float = RATE_LIMIT_WINDOW_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.max_calls = max_calls
        self.window = window
        self._clock = clock
        self._calls: dict[int, deque[float]] = defaultdict(deque)

    def allow(self, user_id: int) -> bool:
        now = self._clock()
        calls = self._calls[user_id]
        while calls and calls[0] <= now - self.window:
            calls.popleft()
        if len(calls) >= self.max_calls:
            return False
        calls.append(now)
        return True


limiter = RateLimiter()


def rate_limited(func: Callable):
    """
    Decorator that refuses a command once the user is over the limit.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max commands per window (default: 30).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        if not limiter.allow(user.id):
            logger.warning(f"Rate limit hit for user {user.id} on {func.__name__}")
            await update.message.reply_text(
                "⚠️ Troppi comandi. Aspetta un momento e riprova."
            )
            return

        return await func(update, context, *args, **kwargs)

    return wrapper
