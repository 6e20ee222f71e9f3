import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List

from expense_ledger.domain.enums import Category
from expense_ledger.domain.models import Expense
from expense_ledger.logging_utils import get_logger
from expense_ledger.repositories.base import ExpenseRepository, ExpenseFormatError, PersistenceError
from expense_ledger.storage.atomic import atomic_write

FORMAT_NAME = "expense-ledger"
FORMAT_VERSION = 1

logger = get_logger(__name__)

class FileExpenseRepository(ExpenseRepository):
    """
    Single-file implementation of the ExpenseRepository.

    The file is line-delimited JSON: a header line naming the format and
    its version, then one object per expense in insertion order. Files
    written by another version are rejected rather than guessed at.
    """

    def __init__(self, path: Path | str = "expenses.dat"):
        self.path = Path(path)

    def load(self) -> List[Expense]:
        """Read every expense from the file, or nothing if it doesn't exist."""
        if not self.path.exists():
            logger.info("No ledger at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                lines = f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e

        if not lines:
            raise ExpenseFormatError(f"{self.path} is empty, expected a header line")

        self._check_header(lines[0])

        expenses = []
        seen_ids = set()
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue
            expense = self._line_to_expense(line, line_number)
            if expense.id in seen_ids:
                raise ExpenseFormatError(
                    f"Duplicate id {expense.id} on line {line_number} of {self.path}"
                )
            seen_ids.add(expense.id)
            expenses.append(expense)

        return expenses

    def save(self, expenses: List[Expense]) -> None:
        """Atomically replace the file with the given sequence."""
        header = {"format": FORMAT_NAME, "version": FORMAT_VERSION}
        try:
            with atomic_write(self.path) as f:
                f.write(json.dumps(header) + "\n")
                for expense in expenses:
                    f.write(json.dumps(self._expense_to_row(expense)) + "\n")
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e

        logger.debug("Saved %d expenses to %s", len(expenses), self.path)

    def _check_header(self, line: str) -> None:
        """Reject files that aren't ours or were written by another version."""
        try:
            header = json.loads(line)
        except json.JSONDecodeError as e:
            raise ExpenseFormatError(f"{self.path} has no readable header: {e}") from e

        if not isinstance(header, dict) or header.get("format") != FORMAT_NAME:
            raise ExpenseFormatError(f"{self.path} is not an expense ledger file")

        version = header.get("version")
        if version != FORMAT_VERSION:
            raise ExpenseFormatError(
                f"{self.path} has format version {version!r}, expected {FORMAT_VERSION}"
            )

    def _expense_to_row(self, expense: Expense) -> Dict[str, Any]:
        """Convert an Expense to its on-disk representation."""
        return {
            "id": expense.id,
            "description": expense.description,
            "amount": str(expense.amount), # Store as string for precision
            "category": expense.category.value,
            "date": expense.date.isoformat(),
        }

    def _line_to_expense(self, line: str, line_number: int) -> Expense:
        """Convert one record line back into an Expense."""
        try:
            row = json.loads(line)
            amount = Decimal(row["amount"])
            expense = Expense(
                id=row["id"],
                description=row["description"],
                amount=amount,
                category=Category(row["category"]),
                date=datetime.fromisoformat(row["date"]),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise ExpenseFormatError(
                f"Malformed record on line {line_number} of {self.path}: {e}"
            ) from e

        if not isinstance(expense.id, str) or not isinstance(expense.description, str):
            raise ExpenseFormatError(
                f"Id and description must be text on line {line_number} of {self.path}"
            )
        if not expense.description.strip():
            raise ExpenseFormatError(
                f"Blank description on line {line_number} of {self.path}"
            )
        if expense.date.tzinfo is not None:
            # Dates are local wall-clock time, always stored without an offset
            raise ExpenseFormatError(
                f"Unexpected time zone in date on line {line_number} of {self.path}"
            )
        if not amount.is_finite() or amount <= 0:
            raise ExpenseFormatError(
                f"Non-positive amount on line {line_number} of {self.path}"
            )
        return expense
