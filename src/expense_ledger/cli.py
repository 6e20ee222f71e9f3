import time
import typer
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from expense_ledger.config.settings import ConfigLoader, LedgerSettings
from expense_ledger.domain.models import Expense, round_money
from expense_ledger.domain.validation import (
    ValidationError,
    parse_amount,
    parse_category,
    validate_description,
    validate_short_id,
)
from expense_ledger.logging_utils import configure_root_logger
from expense_ledger.repositories.file_expense_repository import FileExpenseRepository
from expense_ledger.services.expense_store import ExpenseStore

app = typer.Typer(
    name="expense-ledger",
    help="Record your expenses and see where the money goes",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    settings: Optional[LedgerSettings] = None
    store: Optional[ExpenseStore] = None


state = State()

@app.callback()
def main(
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file", "-d",
        help="Ledger file (defaults to the configured data_file)",
        envvar="EXPENSE_LEDGER_DATA_FILE",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
):
    """
    Expense Ledger - Add, search, summarize and export your expenses.
    """
    settings = ConfigLoader.load_settings()
    if data_file is not None:
        settings.data_file = data_file

    configure_root_logger("INFO" if verbose else settings.log_level)

    state.settings = settings
    state.store = ExpenseStore(FileExpenseRepository(settings.data_file))
    state.verbose = verbose


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."


def percentage_bar(percentage: float, length: int = 20) -> str:
    bars = int(percentage / (100.0 / length))
    return "[" + "█" * bars + " " * (length - bars) + "]"


def fail(message: str) -> None:
    """Print a one-line error and exit non-zero"""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    raise typer.Exit(code=1)


def expense_table(expenses, title: Optional[str] = None, show_id: bool = True) -> Table:
    table = Table(title=title, show_header=True, padding=(0, 1))
    if show_id:
        table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Description", style="white", max_width=25)
    table.add_column("Amount", justify="right", style="red")
    table.add_column("Category", style="magenta")
    table.add_column("Date", style="cyan")

    for expense in expenses:
        row = [
            escape(truncate(expense.description, 23)),
            f"${round_money(expense.amount):,.2f}",
            expense.category.value,
            expense.date.strftime("%Y-%m-%d %H:%M"),
        ]
        if show_id:
            row.insert(0, expense.short_id)
        table.add_row(*row)
    return table


@app.command(name="add")
def add_expense(
    description: str = typer.Argument(..., help="What the money was spent on"),
    amount: str = typer.Argument(..., help="Amount spent, e.g. 12.50"),
    category: str = typer.Option(
        "Other",
        "--category", "-c",
        help="Food(1) Transport(2) Shopping(3) Entertainment(4) Bills(5) Other(6)",
    ),
):
    """
    Add a new expense.

    Examples:
        expense-ledger add "Lunch" 12.50 --category food
        expense-ledger add "Bus pass" 60 -c 2
    """
    try:
        expense = Expense.create(
            description=validate_description(description),
            amount=parse_amount(amount),
            category=parse_category(category),
        )
    except ValidationError as e:
        fail(str(e))

    state.store.add(expense)

    console.print("[bold green]✓ Expense added[/bold green]")
    console.print(
        f"{expense.short_id} | {escape(expense.description)} | "
        f"${round_money(expense.amount):.2f} | {expense.category.value}"
    )


@app.command(name="list")
def list_expenses():
    """
    Show every expense in the order it was added.
    """
    expenses = state.store.list_all()

    if not expenses:
        console.print("[yellow]No expenses found. Add some expenses first![/yellow]")
        return

    console.print(expense_table(expenses, title="All Expenses"))
    console.print(
        f"[bold]Total:[/bold] ${round_money(state.store.total_amount()):,.2f} | "
        f"[bold]Count:[/bold] {len(expenses)}"
    )


@app.command(name="categories")
def view_by_category(
    show: Optional[str] = typer.Option(
        None,
        "--show", "-s",
        help="Also list the expenses in this category",
    ),
):
    """
    Summarize spending per category.

    Examples:
        expense-ledger categories
        expense-ledger categories --show food
    """
    totals = state.store.category_totals()

    if not totals:
        console.print("[yellow]No expenses found. Add some expenses first![/yellow]")
        return

    overall = state.store.total_amount()

    category_table = Table(title="Category Summary", show_header=True, box=None, padding=(0, 2))
    category_table.add_column("Category", style="cyan", no_wrap=True)
    category_table.add_column("Amount", justify="right", style="red")
    category_table.add_column("% of Total", justify="right", style="dim")
    category_table.add_column("", no_wrap=True)

    for name, amount in sorted(totals.items(), key=lambda x: x[1], reverse=True):
        percentage = float(amount / overall * 100)
        category_table.add_row(
            name,
            f"${round_money(amount):,.2f}",
            f"{percentage:.1f}%",
            percentage_bar(percentage),
        )

    console.print(category_table)
    console.print(f"[bold]Overall total:[/bold] ${round_money(overall):,.2f}")

    if show:
        category = parse_category(show).value
        grouped = state.store.expenses_by_category()
        if category not in grouped:
            console.print(f"[yellow]No expenses in {category}[/yellow]")
            return
        console.print(expense_table(grouped[category], title=f"Expenses in {category}", show_id=False))


@app.command(name="search")
def search_expenses(
    keyword: str = typer.Argument(..., help="Text to look for in descriptions and categories"),
):
    """
    Find expenses by keyword (case-insensitive).
    """
    keyword = keyword.strip()
    if not keyword:
        fail("Please enter a search keyword")

    results = state.store.search(keyword)

    if not results:
        console.print(f"[yellow]No expenses found matching \"{escape(keyword)}\"[/yellow]")
        return

    console.print(expense_table(results, title=f"Search results for \"{escape(keyword)}\""))
    total = sum(e.amount for e in results)
    console.print(f"[bold]Found:[/bold] {len(results)} | [bold]Total:[/bold] ${round_money(total):,.2f}")


@app.command(name="delete")
def delete_expense(
    short_id: str = typer.Argument(..., help="First 6 (or more) characters of the expense ID"),
    yes: bool = typer.Option(
        False,
        "--yes", "-y",
        help="Delete without asking for confirmation",
    ),
):
    """
    Delete an expense by its short ID.

    Examples:
        expense-ledger delete 3f2a9c
        expense-ledger delete 3f2a9c --yes
    """
    try:
        short_id = validate_short_id(short_id)
    except ValidationError as e:
        fail(str(e))

    expense = state.store.find_by_prefix(short_id)
    if expense is None:
        fail("No expense found with that ID")

    if not yes:
        console.print(
            f"[yellow]Confirm delete:[/yellow] {escape(expense.description)} | "
            f"${round_money(expense.amount):.2f} | {expense.category.value}"
        )
        answer = typer.prompt("Type 'yes' to confirm", default="", show_default=False)
        if answer.strip().lower() != "yes":
            console.print("Deletion cancelled.")
            return

    if state.store.delete(expense.id):
        console.print("[bold green]✓ Expense deleted[/bold green]")
    else:
        fail("Failed to delete expense")


@app.command(name="stats")
def show_statistics():
    """
    Show totals, averages, recent activity and monthly breakdown.
    """
    stats = state.store.statistics(recent_days=state.settings.recent_days)

    if stats.is_empty:
        console.print("[yellow]No expenses to analyze. Add some expenses first![/yellow]")
        return

    summary_text = (
        f"[bold]Total Expenses:[/bold]  ${round_money(stats.total):>10,.2f}\n"
        f"[bold]Count:[/bold]           {stats.count:>11}\n"
        f"[bold]Average:[/bold]         ${round_money(stats.average):>10,.2f}\n"
        f"[bold]Recent ({stats.recent_days} days):[/bold] {stats.recent_count:>9}\n"
        f"{'─' * 30}\n"
        f"[green]Smallest:[/green] {escape(truncate(stats.smallest.description, 20))} "
        f"(${round_money(stats.smallest.amount):,.2f})\n"
        f"[red]Largest:[/red]  {escape(truncate(stats.largest.description, 20))} "
        f"(${round_money(stats.largest.amount):,.2f})"
    )
    console.print(Panel(summary_text, title="[bold]Expense Statistics[/bold]", border_style="cyan", padding=(1, 2)))

    monthly_table = Table(title="Monthly Breakdown", show_header=True, box=None, padding=(0, 2))
    monthly_table.add_column("Month", style="cyan")
    monthly_table.add_column("Amount", justify="right", style="red")
    for month, amount in stats.monthly_totals:
        monthly_table.add_row(month, f"${round_money(amount):,.2f}")
    console.print(monthly_table)

    insight_table = Table(title="Top Categories", show_header=True, box=None, padding=(0, 2))
    insight_table.add_column("Category", style="cyan")
    insight_table.add_column("Amount", justify="right", style="red")
    insight_table.add_column("% of Total", justify="right", style="dim")
    for name, amount in stats.top_categories(3):
        insight_table.add_row(name, f"${round_money(amount):,.2f}", f"{stats.share_of_total(amount):.1f}%")
    console.print(insight_table)


@app.command(name="export")
def export_csv(
    filename: Optional[str] = typer.Argument(None, help="CSV file to write (default: expenses_<timestamp>.csv)"),
):
    """
    Export every expense to a CSV file.

    Examples:
        expense-ledger export
        expense-ledger export march
    """
    if not filename:
        filename = f"expenses_{int(time.time() * 1000)}.csv"
    if not filename.endswith(".csv"):
        filename += ".csv"

    try:
        count = state.store.export_csv(filename)
    except OSError as e:
        if state.verbose:
            console.print_exception()
        fail(f"Could not export: {e}")

    console.print(f"[bold green]✓ Exported {count} expenses[/bold green]")
    console.print(f"File saved in: {Path(filename).absolute()}")


def cli_main():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    cli_main()
