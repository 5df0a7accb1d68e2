"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "forfettario")
DB_USER: str = os.getenv("DB_USER", "forfettario_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Security ──────────────────────────────────────────────
_raw_ids = os.getenv("ALLOWED_USER_IDS", "")
ALLOWED_USER_IDS: list[int] = (
    [int(uid.strip()) for uid in _raw_ids.split(",") if uid.strip()]
    if _raw_ids
    else []
)

# ── Rate Limiting ─────────────────────────────────────────
RATE_LIMIT_MESSAGES: int = int(os.getenv("RATE_LIMIT_MESSAGES", "30"))
RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── Regime forfettario ────────────────────────────────────
# Fallbacks used when a setting row is missing or the settings
# table cannot be read.
DEFAULT_TAXABLE_PERCENTAGE: str = os.getenv("DEFAULT_TAXABLE_PERCENTAGE", "67")
DEFAULT_INCOME_TAX_RATE: str = os.getenv("DEFAULT_INCOME_TAX_RATE", "15")
DEFAULT_HEALTH_INSURANCE_RATE: str = os.getenv("DEFAULT_HEALTH_INSURANCE_RATE", "26.07")
DEFAULT_TARGET_SALARY: str = os.getenv("DEFAULT_TARGET_SALARY", "3000")
DEFAULT_VAT_RATE: str = os.getenv("DEFAULT_VAT_RATE", "22")

# Annual revenue ceiling of the regime, in currency units.
ANNUAL_REVENUE_LIMIT: str = os.getenv("ANNUAL_REVENUE_LIMIT", "85000")
