"""
Customer record types.

Each category has its own record type and lives in its own store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class Category(str, Enum):
    REGULAR = "regular"
    RENTER = "renter"

    @property
    def letter(self) -> str:
        """Menu letter used to pick the category (C = regular customer, R = renter)."""
        return "C" if self is Category.REGULAR else "R"

    @classmethod
    def from_letter(cls, letter: str) -> "Category":
        for category in cls:
            if category.letter == letter.strip().upper():
                return category
        raise ValueError(f"Unknown customer type: {letter!r}")


@dataclass
class Customer:
    code: int
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        d = self.__dict__.copy()
        d["category"] = self.category.value
        return d


@dataclass
class RegularCustomer(Customer):
    loyalty_points: int = 0
    category: Category = field(default=Category.REGULAR, init=False)


@dataclass
class Renter(Customer):
    deposit: float = 0.0
    category: Category = field(default=Category.RENTER, init=False)


RECORD_TYPES = {
    Category.REGULAR: RegularCustomer,
    Category.RENTER: Renter,
}
