"""
models/ - Domain Layer
======================
Dataclasses for ledger records (invoices, expenses, clients, worked hours),
the regime settings, and the read-only report views built from them.
"""
