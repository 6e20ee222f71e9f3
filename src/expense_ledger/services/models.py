"""
Service layer models - DTOs for store queries.

These models represent the results of store operations, not domain entities.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple
from expense_ledger.domain.models import Expense, round_money

@dataclass
class ExpenseStatistics:
    """
    Snapshot of overall spending for the statistics report.

    Monthly totals are ordered by month, category totals by amount
    (largest first).
    """

    total: Decimal
    count: int
    recent_count: int
    recent_days: int

    smallest: Optional[Expense] = None
    largest: Optional[Expense] = None

    monthly_totals: List[Tuple[str, Decimal]] = field(default_factory=list)
    category_totals: List[Tuple[str, Decimal]] = field(default_factory=list)

    @property
    def average(self) -> Decimal:
        """Mean amount per expense, zero when there are none"""
        if self.count == 0:
            return Decimal("0")
        return self.total / self.count

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def top_categories(self, limit: int = 3) -> List[Tuple[str, Decimal]]:
        """Largest categories by spend"""
        return self.category_totals[:limit]

    def share_of_total(self, amount: Decimal) -> Decimal:
        """Percentage of the overall total the amount represents"""
        if self.total == 0:
            return Decimal("0")
        return amount / self.total * 100

    def __post_init__(self):
        """Validate the extremes are present exactly when there is data"""
        if (self.smallest is None) != (self.count == 0):
            raise ValueError(
                f"Inconsistent statistics: count={self.count} "
                f"but smallest={self.smallest!r}"
            )

    def __str__(self) -> str:
        """Human-readable summary"""
        lines = [
            f"Total: ${round_money(self.total):,.2f}",
            f"Expenses: {self.count}",
            f"Average: ${round_money(self.average):,.2f}",
            f"Recent ({self.recent_days} days): {self.recent_count}",
        ]
        return "\n".join(lines)
