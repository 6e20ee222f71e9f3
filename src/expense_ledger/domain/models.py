from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import uuid4
from expense_ledger.domain.enums import Category

SHORT_ID_LENGTH = 6
CENT = Decimal("0.01")

def round_money(amount: Decimal) -> Decimal:
    """Round to whole cents, halves away from zero (0.125 -> 0.13)"""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)

def new_expense_id() -> str:
    """Random, globally unique identifier in canonical uuid text form"""
    return str(uuid4())

@dataclass(frozen=True, eq=False)
class Expense:
    """Core domain model representing a single expense"""
    id: str
    description: str
    amount: Decimal
    category: Category
    date: datetime

    @classmethod
    def create(
        cls,
        description: str,
        amount: Decimal,
        category: Category,
        now: Optional[datetime] = None,
    ) -> "Expense":
        """
        Build a new expense with a fresh id and a creation timestamp.

        No validation happens here; callers check the description, amount
        and category before handing the record to the store.

        Args:
            description: Free text, surrounding whitespace is trimmed
            amount: Monetary amount, kept verbatim
            category: Category the expense is filed under
            now: Timestamp to stamp the record with (defaults to local now)
        """
        return cls(
            id=new_expense_id(),
            description=description.strip(),
            amount=amount,
            category=category,
            date=now if now is not None else datetime.now(),
        )

    @property
    def short_id(self) -> str:
        """User-visible handle: the first characters of the id"""
        return self.id[:SHORT_ID_LENGTH]

    def __eq__(self, other):
        if not isinstance(other, Expense):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        """Identity is the id alone"""
        return hash(self.id)

    def __repr__(self):
        return (
            f"Expense({self.short_id}, {self.description[:30]}, "
            f"${self.amount}, {self.category.value}, {self.date:%Y-%m-%d %H:%M})"
        )
