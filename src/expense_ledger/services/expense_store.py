from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Callable, Dict, List, Optional

from expense_ledger.domain.models import Expense
from expense_ledger.logging_utils import get_logger
from expense_ledger.repositories.base import ExpenseRepository, PersistenceError
from expense_ledger.services.csv_export import write_csv
from expense_ledger.services.models import ExpenseStatistics

DEFAULT_RECENT_DAYS = 7

logger = get_logger(__name__)

class ExpenseStore:
    """
    Owner of every expense in the ledger.

    Keeps the sequence in insertion order, saves the whole sequence after
    each mutation and answers every query with a fresh pass over it.
    Storage problems never stop the session: a failed load starts empty,
    a failed save keeps the in-memory change.

    Usage:
        store = ExpenseStore(FileExpenseRepository("expenses.dat"))
        store.add(Expense.create("Lunch", Decimal("12.50"), Category.FOOD))
        store.category_totals()  # {"Food": Decimal("12.50")}
    """

    def __init__(
        self,
        repository: ExpenseRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the store and load persisted expenses.

        Args:
            repository: Where the sequence is loaded from and saved to
            clock: Source of "now" for time-window queries.
                Inject a fixed clock in tests.
        """
        self.repository = repository
        self.clock = clock
        self._expenses: List[Expense] = self._load()

    def _load(self) -> List[Expense]:
        try:
            return list(self.repository.load())
        except PersistenceError as e:
            logger.warning("Could not load saved expenses, starting fresh: %s", e)
            return []

    def _persist(self) -> None:
        try:
            self.repository.save(list(self._expenses))
        except PersistenceError as e:
            logger.warning("Could not save expenses: %s", e)

    # Mutations

    def add(self, expense: Expense) -> None:
        """Append an expense and persist. No validation at this layer."""
        self._expenses.append(expense)
        self._persist()
        logger.info("Added expense %s", expense.short_id)

    def delete(self, expense_id: str) -> bool:
        """
        Delete one expense by full id, or by id prefix.

        An exact id match wins; otherwise the first expense (in insertion
        order) whose id starts with the argument is removed.

        Args:
            expense_id: Full id or a prefix of one

        Returns:
            True if an expense was removed, False if nothing matched
        """
        index = self._index_of(expense_id)
        if index is None:
            return False

        removed = self._expenses.pop(index)
        self._persist()
        logger.info("Deleted expense %s", removed.short_id)
        return True

    def _index_of(self, expense_id: str) -> Optional[int]:
        for i, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return i
        for i, expense in enumerate(self._expenses):
            if expense.id.startswith(expense_id):
                return i
        return None

    # Queries

    def find_by_prefix(self, prefix: str) -> Optional[Expense]:
        """First expense, in insertion order, whose id starts with prefix"""
        for expense in self._expenses:
            if expense.id.startswith(prefix):
                return expense
        return None

    def list_all(self) -> List[Expense]:
        """Snapshot of every expense in insertion order"""
        return list(self._expenses)

    def search(self, keyword: str) -> List[Expense]:
        """
        Case-insensitive substring match on description or category.

        An empty keyword matches everything; callers that don't want that
        must check before calling.
        """
        needle = keyword.lower()
        return [
            e for e in self._expenses
            if needle in e.description.lower() or needle in e.category.value.lower()
        ]

    def total_amount(self) -> Decimal:
        """Sum of all amounts, zero when empty"""
        return sum((e.amount for e in self._expenses), Decimal("0"))

    def category_totals(self) -> Dict[str, Decimal]:
        """Summed amount per category name; empty categories are absent"""
        totals = defaultdict(Decimal)
        for expense in self._expenses:
            totals[expense.category.value] += expense.amount
        return dict(totals)

    def expenses_by_category(self) -> Dict[str, List[Expense]]:
        """Expenses grouped by category name, insertion order kept per group"""
        groups = defaultdict(list)
        for expense in self._expenses:
            groups[expense.category.value].append(expense)
        return dict(groups)

    def monthly_totals(self) -> Dict[str, Decimal]:
        """Summed amount per "YYYY-MM" month of the local expense date"""
        totals = defaultdict(Decimal)
        for expense in self._expenses:
            totals[expense.date.strftime("%Y-%m")] += expense.amount
        return dict(totals)

    def recent(self, days: int = DEFAULT_RECENT_DAYS) -> List[Expense]:
        """Expenses dated strictly after (now - days)"""
        cutoff = self.clock() - timedelta(days=days)
        return [e for e in self._expenses if e.date > cutoff]

    def statistics(self, recent_days: int = DEFAULT_RECENT_DAYS) -> ExpenseStatistics:
        """Overall spending figures for the statistics report"""
        expenses = self._expenses

        return ExpenseStatistics(
            total=self.total_amount(),
            count=len(expenses),
            recent_count=len(self.recent(recent_days)),
            recent_days=recent_days,
            smallest=min(expenses, key=lambda e: e.amount, default=None),
            largest=max(expenses, key=lambda e: e.amount, default=None),
            monthly_totals=sorted(self.monthly_totals().items()),
            category_totals=sorted(
                self.category_totals().items(),
                key=lambda x: x[1],
                reverse=True
            ),
        )

    # Export

    def export_csv(self, path: Path | str) -> int:
        """
        Write every expense to a CSV file.

        Raises:
            OSError: If the file cannot be created or written

        Returns:
            Number of expenses written
        """
        count = write_csv(path, self._expenses)
        logger.info("Exported %d expenses to %s", count, path)
        return count
