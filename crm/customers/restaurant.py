"""
Restaurant sales on top of the customer registry.

A purchase moves money from a customer into the restaurant's total sales:
regular customers always pay and earn loyalty points; renters pay from their
deposit, which may not drop below the configured minimum balance.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from crm.core.config import CRM_SETTINGS
from crm.core.logging import get_logger
from crm.customers.models import Category, RegularCustomer, Renter
from crm.customers.registry import CustomerRegistry
from crm.records.store import StoreError

logger = get_logger("crm.restaurant")


@dataclass
class Transaction:
    code: int
    amount: float
    success: bool
    customer_name: str = ""
    message: str = ""
    error: Optional[StoreError] = None


@dataclass
class SimulationResult:
    transactions: List[Transaction] = field(default_factory=list)
    skipped: str = ""

    @property
    def ran(self) -> bool:
        return not self.skipped


class Restaurant:
    """A named restaurant with its customer registry and running sales total."""

    def __init__(
        self,
        name: Optional[str] = None,
        registry: Optional[CustomerRegistry] = None,
    ) -> None:
        self.name = name or CRM_SETTINGS.restaurant_name
        self.registry = registry if registry is not None else CustomerRegistry.from_settings()
        self.total_sales = 0.0
        self.minimum_balance = CRM_SETTINGS.minimum_balance
        self.pesos_per_point = CRM_SETTINGS.pesos_per_point

    def purchase(self, code: int, amount: float) -> Transaction:
        customer = self.registry.find_customer(code)
        if customer is None:
            return Transaction(
                code=code,
                amount=amount,
                success=False,
                message="Sorry! There is no existing customer record for that code.",
                error=StoreError.NOT_FOUND,
            )

        if isinstance(customer, Renter):
            if customer.deposit - amount < self.minimum_balance:
                logger.info("Renter %s purchase of %.2f declined", code, amount)
                return Transaction(
                    code=code,
                    amount=amount,
                    success=False,
                    customer_name=customer.full_name,
                    message=(
                        "Sorry! The transaction failed because the deposit "
                        "would be below the minimum allowed."
                    ),
                )
            customer.deposit -= amount
        elif isinstance(customer, RegularCustomer):
            customer.loyalty_points += int(amount // self.pesos_per_point)

        self.total_sales += amount
        logger.info("Customer %s paid %.2f", code, amount)
        return Transaction(
            code=code,
            amount=amount,
            success=True,
            customer_name=customer.full_name,
            message=f"Success! {customer.full_name} has paid {amount:.2f}!",
        )

    def simulate_sales(self, rng: Optional[random.Random] = None) -> SimulationResult:
        """
        Run three purchases against randomly chosen customers.

        1. a regular customer buys a meal
        2. a renter buys a meal
        3. a renter makes a large purchase (may exceed the allowed balance)
        """
        registry = self.registry
        if Category.REGULAR not in registry.categories or registry.count(Category.REGULAR) == 0:
            return SimulationResult(
                skipped="Sorry! Sales cannot be simulated without a regular customer record."
            )
        if Category.RENTER not in registry.categories or registry.count(Category.RENTER) == 0:
            return SimulationResult(
                skipped="Sorry! Sales cannot be simulated without a renter record."
            )

        rng = rng or random.Random()
        amounts = CRM_SETTINGS.simulation_amounts
        plan = [
            (Category.REGULAR, amounts["regular_purchase"]),
            (Category.RENTER, amounts["renter_purchase"]),
            (Category.RENTER, amounts["renter_large_purchase"]),
        ]

        result = SimulationResult()
        for category, amount in plan:
            customer = rng.choice(registry.list_customers(category))
            result.transactions.append(self.purchase(customer.code, amount))
        return result
