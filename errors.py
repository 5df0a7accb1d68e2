"""
errors.py
---------
Exception taxonomy shared by repositories, services and handlers.

    LedgerError
    ├── InvalidInput         malformed amount / rate / date / period
    ├── ClientNotFound       worked hours against an unknown client
    ├── SettingsUnavailable  settings table unreadable (callers fall back to defaults)
    └── DataAccessFailure    any other database failure, never retried here
"""


class LedgerError(Exception):
    """Base class for every error raised by the bookkeeping core."""


class InvalidInput(LedgerError, ValueError):
    """A value was rejected before any arithmetic was done."""


class ClientNotFound(LedgerError, LookupError):
    """The referenced client does not exist."""

    def __init__(self, client_id):
        super().__init__(f"Client {client_id} not found")
        self.client_id = client_id


class SettingsUnavailable(LedgerError):
    """The settings store could not be read."""


class DataAccessFailure(LedgerError):
    """A read or write against the database failed."""
