"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist and
seeds the regime settings and default expense categories.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import psycopg2

from db.connection import pooled_connection
from errors import DataAccessFailure
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Settings table: regime forfettario parameters as key/value text
CREATE TABLE IF NOT EXISTS settings (
    setting_key     VARCHAR(100) PRIMARY KEY,
    setting_value   TEXT NOT NULL,
    description     TEXT,
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Categories table: groups expenses for reporting and charts
CREATE TABLE IF NOT EXISTS categories (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) UNIQUE NOT NULL,
    type            VARCHAR(10) NOT NULL DEFAULT 'expense' CHECK (type IN ('expense', 'income')),
    color           VARCHAR(7) NOT NULL DEFAULT '#3498db',
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Clients table: hourly rate used to price worked hours
CREATE TABLE IF NOT EXISTS clients (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(200) UNIQUE NOT NULL,
    hourly_rate     NUMERIC(10,2) NOT NULL DEFAULT 0,
    notes           TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Invoices table: draft -> sent -> paid, or overdue past due_date
CREATE TABLE IF NOT EXISTS invoices (
    id              SERIAL PRIMARY KEY,
    invoice_number  VARCHAR(50) UNIQUE NOT NULL,
    client_name     VARCHAR(200) NOT NULL,
    description     TEXT,
    amount          NUMERIC(12,2) NOT NULL,
    vat_rate        NUMERIC(5,2) NOT NULL DEFAULT 0,
    vat_amount      NUMERIC(12,2) NOT NULL DEFAULT 0,
    total_amount    NUMERIC(12,2) NOT NULL,
    status          VARCHAR(10) NOT NULL DEFAULT 'draft'
                    CHECK (status IN ('draft', 'sent', 'paid', 'overdue')),
    issue_date      DATE NOT NULL,
    due_date        DATE NOT NULL,
    paid_date       DATE,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Expenses table: iva_amount is 0 when IVA is already included in amount
CREATE TABLE IF NOT EXISTS expenses (
    id              SERIAL PRIMARY KEY,
    description     VARCHAR(500) NOT NULL,
    amount          NUMERIC(12,2) NOT NULL,
    iva_included    BOOLEAN NOT NULL DEFAULT TRUE,
    iva_rate        NUMERIC(5,2) NOT NULL DEFAULT 0,
    iva_amount      NUMERIC(12,2) NOT NULL DEFAULT 0,
    category_id     INT NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
    expense_date    DATE NOT NULL,
    notes           TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Worked hours table: amount_cached is priced at log/edit time
CREATE TABLE IF NOT EXISTS worked_hours (
    id              SERIAL PRIMARY KEY,
    client_id       INT NOT NULL REFERENCES clients(id) ON DELETE RESTRICT,
    worked_date     DATE NOT NULL,
    hours           NUMERIC(5,2) NOT NULL CHECK (hours > 0),
    amount_cached   NUMERIC(10,2) NOT NULL,
    note            TEXT,
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Indexes for the dashboard date filters
CREATE INDEX IF NOT EXISTS idx_invoices_issue_status ON invoices(issue_date, status);
CREATE INDEX IF NOT EXISTS idx_invoices_due ON invoices(due_date) WHERE paid_date IS NULL;
CREATE INDEX IF NOT EXISTS idx_expenses_date ON expenses(expense_date);
CREATE INDEX IF NOT EXISTS idx_worked_hours_client_date ON worked_hours(client_id, worked_date);
"""

SEED_SQL = """
INSERT INTO settings (setting_key, setting_value, description) VALUES
    ('default_vat_rate', '22', 'Default IVA rate for new invoices'),
    ('target_salary', '3000', 'Monthly net amount to take home'),
    ('taxable_percentage', '67', 'Coefficiente di redditività'),
    ('income_tax_rate', '15', 'Imposta sostitutiva (15%, 5% for the first 5 years)'),
    ('health_insurance_rate', '26.07', 'INPS Gestione Separata rate')
ON CONFLICT (setting_key) DO NOTHING;

INSERT INTO categories (name, type, color) VALUES
    ('Software e Abbonamenti', 'expense', '#3498db'),
    ('Attrezzature e Hardware', 'expense', '#e74c3c'),
    ('Forniture Ufficio', 'expense', '#2ecc71'),
    ('Viaggi e Trasporti', 'expense', '#f39c12'),
    ('Marketing e Pubblicità', 'expense', '#9b59b6'),
    ('Servizi Professionali', 'expense', '#1abc9c'),
    ('Formazione e Istruzione', 'expense', '#34495e'),
    ('Assicurazioni', 'expense', '#e67e22'),
    ('Utenze e Internet', 'expense', '#95a5a6'),
    ('Varie', 'expense', '#7f8c8d')
ON CONFLICT (name) DO NOTHING;
"""


def create_tables() -> None:
    """
    Execute the schema and seed SQL.
    Safe to call multiple times (IF NOT EXISTS / ON CONFLICT DO NOTHING).
    """
    with pooled_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                cur.execute(SEED_SQL)
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to initialize schema: {e}")
            raise DataAccessFailure("Schema initialization failed") from e
    logger.info("Ledger schema ready.")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("✅ Database schema created successfully.")
