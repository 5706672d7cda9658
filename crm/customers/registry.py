"""
Customer registry: one record store per customer category.

Codes are generated here, never by the stores. Each category owns the numeric
range [code_base, code_base + code_span), so the category of any code can be
recovered from the number alone:

    regular   1001, 1002, ...   (base 1000)
    renter    2001, 2002, ...   (base 2000)

Per-category counters only ever increase; deleting a customer never frees its
code for reuse within the same run.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from crm.core.config import CRM_SETTINGS
from crm.core.logging import get_logger
from crm.customers.models import RECORD_TYPES, Category, Customer
from crm.records.store import RecordStore, StoreError

logger = get_logger("crm.customers")


@dataclass(frozen=True)
class CategorySpec:
    category: Category
    code_base: int
    capacity: int
    label: str = ""


@dataclass
class AddResult:
    record: Optional[Customer] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CustomerRegistry:
    """
    Owns the per-category stores and their code counters.

    A registry built with a single CategorySpec is the one-category variant:
    every code routes to that category's store.
    """

    def __init__(self, specs: Iterable[CategorySpec], code_span: int = 1000) -> None:
        ordered = sorted(specs, key=lambda s: s.code_base)
        if not ordered:
            raise ValueError("A registry needs at least one category")
        if code_span < 2:
            raise ValueError(f"code_span must be at least 2, got {code_span}")
        if len({s.category for s in ordered}) != len(ordered):
            raise ValueError("Each category may only be configured once")
        for lower, upper in zip(ordered, ordered[1:]):
            if lower.code_base + code_span > upper.code_base:
                raise ValueError(
                    f"Code ranges of {lower.category.value} and {upper.category.value} overlap"
                )

        self.code_span = code_span
        self._specs: Dict[Category, CategorySpec] = {s.category: s for s in ordered}
        self._stores: Dict[Category, RecordStore] = {
            s.category: RecordStore(
                s.capacity,
                name=s.category.value,
                immutable_fields=("category",),
            )
            for s in ordered
        }
        self._counters: Dict[Category, int] = {s.category: 0 for s in ordered}

    @classmethod
    def from_settings(
        cls,
        categories: Iterable[Category] = tuple(Category),
        capacity: Optional[int] = None,
    ) -> "CustomerRegistry":
        """Build a registry from config.yaml; ``capacity`` overrides every category's capacity."""
        specs = [
            CategorySpec(
                category=c,
                code_base=CRM_SETTINGS.category_base(c.value),
                capacity=capacity if capacity is not None else CRM_SETTINGS.category_capacity(c.value),
                label=CRM_SETTINGS.category_label(c.value),
            )
            for c in categories
        ]
        return cls(specs, code_span=CRM_SETTINGS.code_span)

    # -------- Categories and codes --------

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._specs)

    def label(self, category: Category) -> str:
        spec = self._spec(category)
        return spec.label or category.value.title()

    def code_range(self, category: Optional[Category] = None) -> Tuple[int, int]:
        """Inclusive (lowest, highest) code that can be assigned in a category, or across all."""
        if category is not None:
            base = self._spec(category).code_base
            return base + 1, base + self.code_span - 1
        bases = [s.code_base for s in self._specs.values()]
        return min(bases) + 1, max(bases) + self.code_span - 1

    def assign_code(self, category: Category) -> int:
        """Issue the next code for a category and advance its counter."""
        spec = self._spec(category)
        if self._exhausted(category):
            raise ValueError(f"No codes left in the {category.value} range")
        self._counters[category] += 1
        return self._counters[category] + spec.code_base

    def route_by_code(self, code: int) -> Category:
        """Category whose range holds this code (lowest category for codes below every range)."""
        owner = None
        for spec in self._specs.values():
            if spec.code_base <= code:
                owner = spec.category
        return owner if owner is not None else next(iter(self._specs))

    def _exhausted(self, category: Category) -> bool:
        return self._counters[category] + 1 >= self.code_span

    def _store(self, category: Category) -> RecordStore:
        return self._stores[self._spec(category).category]

    def _spec(self, category: Category) -> CategorySpec:
        try:
            return self._specs[category]
        except KeyError:
            raise ValueError(f"Category {category.value} is not configured") from None

    # -------- Customer operations --------

    def add_customer(self, category: Category, **payload: Any) -> AddResult:
        """
        Create a customer with a fresh code.

        Fails only with CAPACITY_EXCEEDED: the category store is full, or its
        code range has been used up. No code is consumed on failure.
        """
        store = self._store(category)
        if store.is_full:
            logger.info("Cannot add %s customer: store is full", category.value)
            return AddResult(error=StoreError.CAPACITY_EXCEEDED)
        if self._exhausted(category):
            logger.warning("Cannot add %s customer: code range exhausted", category.value)
            return AddResult(error=StoreError.CAPACITY_EXCEEDED)

        record = RECORD_TYPES[category](code=self.assign_code(category), **payload)
        error = store.add(record)
        if error is not None:
            return AddResult(error=error)
        return AddResult(record=record)

    def find_customer(self, code: int) -> Optional[Customer]:
        return self._stores[self.route_by_code(code)].find(code)

    def update_customer(self, code: int, **fields: Any) -> Optional[StoreError]:
        return self._stores[self.route_by_code(code)].update(code, **fields)

    def delete_customer(self, code: int) -> Optional[StoreError]:
        return self._stores[self.route_by_code(code)].delete(code)

    def list_customers(self, category: Category) -> Tuple[Customer, ...]:
        return self._store(category).list()

    # -------- Counts --------

    def count(self, category: Optional[Category] = None) -> int:
        if category is not None:
            return self._store(category).count
        return sum(store.count for store in self._stores.values())

    def capacity(self, category: Category) -> int:
        return self._store(category).capacity

    def is_full(self, category: Optional[Category] = None) -> bool:
        """Whether a category (or, with no argument, every category) is at capacity."""
        if category is not None:
            return self._store(category).is_full
        return all(store.is_full for store in self._stores.values())

    def can_add(self, category: Optional[Category] = None) -> bool:
        """
        Whether add_customer can succeed: the store has room and codes remain.

        With no argument, whether any category can still take a customer.
        """
        if category is not None:
            return not self._store(category).is_full and not self._exhausted(category)
        return any(self.can_add(c) for c in self._specs)
