from abc import ABC, abstractmethod
from typing import List

from expense_ledger.domain.models import Expense

class PersistenceError(OSError):
    """Raised when the persisted ledger cannot be read or written."""
    pass

class ExpenseFormatError(PersistenceError):
    """Raised when the persisted ledger is not in a format we recognise."""
    pass

class ExpenseRepository(ABC):
    """
    Abstract repository for expense persistence.

    The store keeps the whole sequence in memory, so the repository only
    needs to hand back everything on load and take everything on save.
    """

    @abstractmethod
    def load(self) -> List[Expense]:
        """
        Read the last saved sequence.

        Returns:
            Expenses in insertion order, empty if nothing was saved yet

        Raises:
            PersistenceError: If the data exists but cannot be read
            ExpenseFormatError: If the data is not a recognised format
        """
        pass

    @abstractmethod
    def save(self, expenses: List[Expense]) -> None:
        """
        Replace the saved sequence with the given one.

        Args:
            expenses: Full sequence, in insertion order

        Raises:
            PersistenceError: If the write fails
        """
        pass
