"""
Shared test fixtures for CRM.

Provides small-capacity registries, a restaurant with seeded customers,
and a CLI runner for isolated testing.
"""

import random

import pytest

from crm.customers.models import Category
from crm.customers.registry import CategorySpec, CustomerRegistry
from crm.customers.restaurant import Restaurant
from crm.records.store import RecordStore


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


@pytest.fixture
def small_store():
    """Empty store that fills up after three records."""
    return RecordStore(3, name="test")


@pytest.fixture
def registry():
    """Two-category registry (regular 1000s, renter 2000s) with room for three of each."""
    return CustomerRegistry(
        [
            CategorySpec(Category.REGULAR, code_base=1000, capacity=3, label="Regular Customer"),
            CategorySpec(Category.RENTER, code_base=2000, capacity=3, label="Renter"),
        ]
    )


@pytest.fixture
def restaurant(registry):
    """Restaurant with two regular customers and one renter."""
    r = Restaurant(name="Quatro", registry=registry)
    registry.add_customer(Category.REGULAR, first_name="Ana", last_name="Cruz", loyalty_points=5)
    registry.add_customer(Category.REGULAR, first_name="Bo", last_name="Santos", loyalty_points=0)
    registry.add_customer(Category.RENTER, first_name="Cy", last_name="Reyes", deposit=3000.0)
    return r


@pytest.fixture
def rng():
    return random.Random(7)
