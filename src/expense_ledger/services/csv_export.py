"""
CSV export of the ledger.

Only the description is quoted (with embedded quotes doubled). Ids and
categories never contain commas, so the remaining fields are written bare.
"""
from pathlib import Path
from typing import Iterable

from expense_ledger.domain.models import Expense, round_money

CSV_HEADER = "ID,Description,Amount,Category,Date"
CSV_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def quote_description(description: str) -> str:
    """Wrap in double quotes, doubling any quote inside"""
    return '"' + description.replace('"', '""') + '"'

def format_csv_line(expense: Expense) -> str:
    """Render one expense as a CSV line (without terminator)"""
    return ",".join([
        expense.id,
        quote_description(expense.description),
        f"{round_money(expense.amount):.2f}",
        expense.category.value,
        expense.date.strftime(CSV_DATE_FORMAT),
    ])

def write_csv(path: Path | str, expenses: Iterable[Expense]) -> int:
    """
    Write the header and one line per expense.

    Lines end with the platform newline (text mode translation).

    Raises:
        OSError: If the file cannot be created or written

    Returns:
        Number of expenses written
    """
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        f.write(CSV_HEADER + "\n")
        for expense in expenses:
            f.write(format_csv_line(expense) + "\n")
            count += 1
    return count
