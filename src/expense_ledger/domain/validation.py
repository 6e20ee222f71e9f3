"""
Input validation for values typed by the user.

The store accepts whatever it is given; these helpers are the gate the
presentation layer runs before building an Expense or looking one up.
"""
from decimal import Decimal, InvalidOperation
from expense_ledger.domain.enums import Category
from expense_ledger.domain.models import SHORT_ID_LENGTH

class ValidationError(ValueError):
    """Raised when user input does not meet the record constraints."""
    pass

def validate_description(description: str) -> str:
    """Return the trimmed description, rejecting blank input"""
    trimmed = description.strip()
    if not trimmed:
        raise ValidationError("Description cannot be empty")
    return trimmed

def parse_amount(text: str) -> Decimal:
    """
    Parse a positive monetary amount.

    Args:
        text: Raw user input such as "12.50"

    Raises:
        ValidationError: If the text is not a finite number greater than zero

    Returns:
        The amount as a Decimal
    """
    try:
        amount = Decimal(str(text).strip())
    except InvalidOperation:
        raise ValidationError(f"Not a valid amount: {text!r}")

    if not amount.is_finite():
        raise ValidationError(f"Not a valid amount: {text!r}")
    if amount <= 0:
        raise ValidationError("Amount must be positive")
    return amount

def parse_category(text: str) -> Category:
    """Resolve a category name or menu number; unknown input becomes Other"""
    return Category.parse(text)

def validate_short_id(short_id: str) -> str:
    """Require at least the short-id length before a delete lookup"""
    short_id = short_id.strip()
    if len(short_id) < SHORT_ID_LENGTH:
        raise ValidationError(
            f"Please enter at least {SHORT_ID_LENGTH} characters of the ID"
        )
    return short_id
