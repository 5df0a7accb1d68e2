"""
repositories/client_repo.py
---------------------------
Read access to clients and their hourly rates.
"""

from typing import Optional

from models.client import Client
from repositories.base import BaseRepository


class ClientRepository(BaseRepository):

    def get_by_id(self, client_id: int) -> Optional[Client]:
        row = self._fetch_one(
            "SELECT id, name, hourly_rate, notes FROM clients WHERE id = %s;",
            (client_id,),
        )
        return self._row_to_client(row) if row else None

    def get_all(self) -> list[Client]:
        """All clients, alphabetically."""
        rows = self._fetch_all("SELECT id, name, hourly_rate, notes FROM clients ORDER BY name ASC;")
        return [self._row_to_client(r) for r in rows]

    @staticmethod
    def _row_to_client(row: dict) -> Client:
        return Client(
            id=row["id"],
            name=row["name"],
            hourly_rate=row["hourly_rate"],
            notes=row["notes"],
        )
