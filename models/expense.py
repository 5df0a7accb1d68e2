"""
models/expense.py
-----------------
Domain model for deductible business expenses.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from utils.money import ZERO, percent_of, round2, to_decimal


@dataclass
class Expense:
    """
    Represents a single business expense.

    Attributes:
        id: Database primary key (None for new records).
        description: What was bought.
        amount: Net amount paid to the supplier.
        iva_included: True when ``amount`` already contains IVA.
        iva_rate: IVA percentage, used only when not included.
        iva_amount: IVA owed on top of ``amount`` (reverse charge on EU B2B
            purchases); 0 when included.
        category_id: Foreign key to categories.
        category_name: Joined category name, if loaded.
        expense_date: Date the expense occurred.
        notes: Optional free text.
        created_at: Timestamp when the record was created.
    """
    description: str
    amount: Decimal
    category_id: int
    expense_date: date = field(default_factory=date.today)
    iva_included: bool = True
    iva_rate: Decimal = ZERO
    iva_amount: Optional[Decimal] = None
    category_name: Optional[str] = None
    notes: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        self.amount = to_decimal(self.amount, "amount")
        self.iva_rate = to_decimal(self.iva_rate, "iva_rate")
        if self.iva_amount is None:
            self.recompute_iva()
        else:
            self.iva_amount = to_decimal(self.iva_amount, "iva_amount")

    def recompute_iva(self) -> Decimal:
        """Refresh ``iva_amount`` after amount, iva_included or iva_rate changed."""
        self.iva_amount = ZERO if self.iva_included else percent_of(self.amount, self.iva_rate)
        return self.iva_amount

    @property
    def cash_cost(self) -> Decimal:
        """What actually leaves the account: amount plus any IVA to remit."""
        return round2(self.amount + self.iva_amount)

    def __str__(self) -> str:
        return f"-{self.cash_cost:.2f} | {self.category_name or self.category_id} | {self.expense_date}"
