"""
repositories/settings_repo.py
-----------------------------
Reads the key/value settings table.
"""

from errors import DataAccessFailure, SettingsUnavailable
from models.settings import TaxSettings
from repositories.base import BaseRepository


class SettingsRepository(BaseRepository):
    """Read-only access to regime parameters."""

    def get_all(self) -> TaxSettings:
        """
        Load every setting row into a TaxSettings.

        Raises:
            SettingsUnavailable: if the table cannot be read.
        """
        try:
            rows = self._fetch_all("SELECT setting_key, setting_value FROM settings;")
        except DataAccessFailure as e:
            raise SettingsUnavailable(str(e)) from e
        return TaxSettings.from_rows({r["setting_key"]: r["setting_value"] for r in rows})
