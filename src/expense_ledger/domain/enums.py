from enum import Enum

class Category(Enum):
    """Closed set of labels an expense can be filed under"""
    FOOD = "Food"
    TRANSPORT = "Transport"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    OTHER = "Other"

    @classmethod
    def from_choice(cls, choice: int) -> "Category":
        """Map a 1-based menu number to a category; anything else is Other"""
        members = list(cls)
        if 1 <= choice <= len(members):
            return members[choice - 1]
        return cls.OTHER

    @classmethod
    def parse(cls, text: str) -> "Category":
        """
        Resolve user input to a category.

        Accepts a menu number ("1".."6") or a category name in any case.
        Unknown input collapses to Other.
        """
        text = text.strip()
        if text.isdigit():
            return cls.from_choice(int(text))

        for member in cls:
            if member.value.lower() == text.lower():
                return member
        return cls.OTHER
