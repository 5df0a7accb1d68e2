"""
handlers/ - Presentation Layer
================================
Telegram command handlers. Each handler parses the command arguments,
calls a Service, and formats the returned view as an Italian reply.
Ledger errors become replies through handlers.common.ledger_errors.
"""
