"""
models/client.py
----------------
Clients that worked hours are logged against.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from utils.money import to_decimal


@dataclass
class Client:
    name: str
    hourly_rate: Decimal
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.hourly_rate = to_decimal(self.hourly_rate, "hourly_rate")
