from enum import Enum


class ExpenseCategory(str, Enum):
    FOOD = "Food"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    CLOTHES = "Clothes"
    GIFT = "Gift"
    EDUCATION = "Education / Schoolwork"
    HEALTH = "Health"
    HOME = "Home / Living"
    FEES = "Fees & Charges"
    VIDEO_GAMES = "Video Games"
    PROJECTS = "Projects"
    OTHER = "Other"

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def label(self) -> str:
        return f"{self.emoji} {self.value}"

    @classmethod
    def from_legacy(cls, text: str | None) -> "ExpenseCategory":
        """Map a stored 'type' string to a category.

        Exact category values round-trip; the old 'Business'/'Personal'
        types and anything unrecognised become OTHER.
        """
        trimmed = (text or "").strip()
        try:
            return cls(trimmed)
        except ValueError:
            return cls.OTHER

    @classmethod
    def is_known(cls, text: str | None) -> bool:
        return text in cls._value2member_map_


_EMOJI = {
    ExpenseCategory.FOOD: "🍽️",
    ExpenseCategory.TRANSPORT: "🚗",
    ExpenseCategory.ENTERTAINMENT: "🎟️",
    ExpenseCategory.CLOTHES: "👕",
    ExpenseCategory.GIFT: "🎁",
    ExpenseCategory.EDUCATION: "📚",
    ExpenseCategory.HEALTH: "🩺",
    ExpenseCategory.HOME: "🏠",
    ExpenseCategory.FEES: "💸",
    ExpenseCategory.VIDEO_GAMES: "🎮",
    ExpenseCategory.PROJECTS: "🛠️",
    ExpenseCategory.OTHER: "📦",
}
