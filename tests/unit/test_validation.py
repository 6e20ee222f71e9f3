import pytest
from decimal import Decimal

from expense_ledger.domain.enums import Category
from expense_ledger.domain.validation import (
    ValidationError,
    parse_amount,
    parse_category,
    validate_description,
    validate_short_id,
)

@pytest.mark.unit
class TestValidation:
    """Test the input gate used before records reach the store"""

    def test_description_is_trimmed(self):
        assert validate_description("  Taxi ") == "Taxi"

    @pytest.mark.parametrize("description", ["", "   ", "\t\n"])
    def test_blank_description_rejected(self, description: str):
        with pytest.raises(ValidationError):
            validate_description(description)

    @pytest.mark.parametrize("text, expected", [
        ("12.50", Decimal("12.50")),
        (" 3 ", Decimal("3")),
        ("0.01", Decimal("0.01")),
    ])
    def test_parse_amount(self, text: str, expected: Decimal):
        assert parse_amount(text) == expected

    @pytest.mark.parametrize("text", ["0", "-5", "abc", "", "NaN", "Infinity"])
    def test_invalid_amount_rejected(self, text: str):
        with pytest.raises(ValidationError):
            parse_amount(text)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_amount("-1")

    def test_unknown_category_becomes_other(self):
        assert parse_category("Groceries") is Category.OTHER

    def test_short_id_must_have_six_characters(self):
        with pytest.raises(ValidationError):
            validate_short_id("abc12")

    def test_short_id_is_trimmed(self):
        assert validate_short_id("  abc123 ") == "abc123"
