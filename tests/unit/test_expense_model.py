import pytest
from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

from expense_ledger.domain.enums import Category
from expense_ledger.domain.models import Expense, SHORT_ID_LENGTH, round_money

@pytest.mark.unit
class TestExpenseCreate:
    """Test construction of new expenses"""

    def test_create_trims_description(self):
        # Act
        expense = Expense.create("  Lunch  ", Decimal("12.50"), Category.FOOD)

        # Assert
        assert expense.description == "Lunch"

    def test_create_keeps_amount_and_category_verbatim(self):
        # Act
        expense = Expense.create("Bus", Decimal("2.75"), Category.TRANSPORT)

        # Assert
        assert expense.amount == Decimal("2.75")
        assert expense.category is Category.TRANSPORT

    def test_create_does_not_validate(self):
        """Validation belongs to the caller, not the model"""
        # Act
        expense = Expense.create("   ", Decimal("-1"), Category.OTHER)

        # Assert
        assert expense.description == ""
        assert expense.amount == Decimal("-1")

    def test_create_generates_unique_ids(self):
        # Act
        ids = {Expense.create("x", Decimal("1"), Category.OTHER).id for _ in range(100)}

        # Assert
        assert len(ids) == 100

    def test_create_stamps_given_time(self):
        # Arrange
        now = datetime(2025, 1, 15, 8, 30)

        # Act
        expense = Expense.create("Coffee", Decimal("3.00"), Category.FOOD, now=now)

        # Assert
        assert expense.date == now

    def test_create_defaults_to_current_time(self):
        # Arrange
        before = datetime.now()

        # Act
        expense = Expense.create("Coffee", Decimal("3.00"), Category.FOOD)

        # Assert
        assert before <= expense.date <= datetime.now()

    def test_id_contains_no_commas(self):
        expense = Expense.create("Coffee", Decimal("3.00"), Category.FOOD)
        assert "," not in expense.id


@pytest.mark.unit
class TestExpenseIdentity:
    """Test equality, hashing and immutability"""

    def test_equality_is_by_id(self, make_expense):
        # Arrange
        original = make_expense("Lunch")
        same_id = Expense(
            id=original.id,
            description="Something else",
            amount=Decimal("99.00"),
            category=Category.BILLS,
            date=datetime(2020, 1, 1),
        )

        # Assert
        assert original == same_id
        assert hash(original) == hash(same_id)
        assert original != make_expense("Lunch")

    def test_fields_cannot_be_reassigned(self, make_expense):
        expense = make_expense()
        with pytest.raises(FrozenInstanceError):
            expense.amount = Decimal("1.00")

    def test_short_id_is_prefix_of_id(self, make_expense):
        expense = make_expense()
        assert len(expense.short_id) == SHORT_ID_LENGTH
        assert expense.id.startswith(expense.short_id)


@pytest.mark.unit
class TestCategory:
    """Test mapping user input onto the closed category set"""

    @pytest.mark.parametrize("choice, expected", [
        (1, Category.FOOD),
        (2, Category.TRANSPORT),
        (3, Category.SHOPPING),
        (4, Category.ENTERTAINMENT),
        (5, Category.BILLS),
        (6, Category.OTHER),
        (0, Category.OTHER),
        (7, Category.OTHER),
        (-3, Category.OTHER),
    ])
    def test_from_choice(self, choice: int, expected: Category):
        assert Category.from_choice(choice) is expected

    @pytest.mark.parametrize("text, expected", [
        ("Food", Category.FOOD),
        ("transport", Category.TRANSPORT),
        (" BILLS ", Category.BILLS),
        ("4", Category.ENTERTAINMENT),
        ("Groceries", Category.OTHER),
        ("", Category.OTHER),
    ])
    def test_parse(self, text: str, expected: Category):
        assert Category.parse(text) is expected


@pytest.mark.unit
class TestRoundMoney:
    """Test rounding to cents for display and export"""

    @pytest.mark.parametrize("amount, expected", [
        ("0.125", "0.13"),
        ("0.135", "0.14"),
        ("0.124", "0.12"),
        ("12.5", "12.50"),
        ("1234567.891", "1234567.89"),
    ])
    def test_halves_round_up(self, amount: str, expected: str):
        assert str(round_money(Decimal(amount))) == expected
