"""
Customer record management module.

Keeps regular customers and renters in separate bounded stores, assigns
category-coded customer numbers, and records restaurant sales.
"""

from crm.customers.models import Category, Customer, RegularCustomer, Renter
from crm.customers.registry import AddResult, CategorySpec, CustomerRegistry
from crm.customers.restaurant import Restaurant, SimulationResult, Transaction

__all__ = [
    "Category",
    "Customer",
    "RegularCustomer",
    "Renter",
    "AddResult",
    "CategorySpec",
    "CustomerRegistry",
    "Restaurant",
    "SimulationResult",
    "Transaction",
]
