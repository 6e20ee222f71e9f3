import pytest
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, List

from expense_ledger.domain.enums import Category
from expense_ledger.domain.models import Expense
from expense_ledger.repositories.file_expense_repository import FileExpenseRepository
from expense_ledger.services.expense_store import ExpenseStore

FIXED_NOW = datetime(2025, 3, 15, 12, 0, 0)

@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to FIXED_NOW"""
    return lambda: FIXED_NOW

@pytest.fixture
def make_expense() -> Callable[..., Expense]:
    """Factory for expenses with an explicit date"""
    def _make(
        description: str = "Lunch",
        amount: str = "12.50",
        category: Category = Category.FOOD,
        date: datetime = FIXED_NOW,
    ) -> Expense:
        return Expense.create(description, Decimal(amount), category, now=date)
    return _make

@pytest.fixture
def sample_expenses(make_expense) -> List[Expense]:
    """Expenses spread over two months and three categories"""
    return [
        make_expense("Groceries", "45.20", Category.FOOD, datetime(2025, 2, 3, 18, 30)),
        make_expense("Taxi to airport", "30.00", Category.TRANSPORT, datetime(2025, 2, 20, 7, 15)),
        make_expense("Coffee", "4.80", Category.FOOD, datetime(2025, 3, 10, 9, 0)),
        make_expense("Electricity", "80.00", Category.BILLS, datetime(2025, 3, 14, 20, 0)),
    ]

@pytest.fixture
def ledger_path(tmp_path) -> Path:
    """Ledger file location inside a temp directory"""
    return tmp_path / "expenses.dat"

@pytest.fixture
def file_store(ledger_path, fixed_clock) -> ExpenseStore:
    """Store backed by a real file in tmp_path"""
    return ExpenseStore(FileExpenseRepository(ledger_path), clock=fixed_clock)
