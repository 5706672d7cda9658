"""
Customer records CLI commands.

Usage:
    crm customers manage
    crm customers manage --name Ana --seed 7
    crm customers manage --format json
"""

import random
from dataclasses import dataclass
from typing import Optional

import typer

from crm.core.config import CRM_SETTINGS
from crm.core.output import OutputFormat, format_result, format_table
from crm.customers.inputs import (
    KEEP_TOKEN,
    confirm_letter,
    prompt_choice,
    prompt_float,
    prompt_int,
    prompt_name,
    resolve_keep,
)
from crm.customers.models import Category, Customer
from crm.customers.restaurant import Restaurant
from crm.records.store import StoreError

app = typer.Typer(no_args_is_help=True)

MENU = [
    ("1", "Add customer"),
    ("2", "Search for customer"),
    ("3", "View records"),
    ("4", "Simulate sales"),
    ("5", "Update customer"),
    ("6", "Remove customer"),
    ("0", "Exit"),
]

COLUMNS = {
    Category.REGULAR: [("Code", "code"), ("Name", "full_name"), ("Loyalty Points", "loyalty_points")],
    Category.RENTER: [("Code", "code"), ("Name", "full_name"), ("Deposit", "deposit")],
}

NOT_FOUND_MSG = "Sorry! There is no existing customer record for that code."


def build_restaurant() -> Restaurant:
    """Fresh restaurant with empty stores sized from config.yaml."""
    return Restaurant()


@dataclass
class MenuSession:
    restaurant: Restaurant
    rng: random.Random
    fmt: OutputFormat = OutputFormat.HUMAN


@app.command("manage")
def manage(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Your name (asked if omitted)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for sales simulation"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.HUMAN, "--format", "-f", help="Record output format: human | json | markdown"
    ),
):
    """Interactively manage the restaurant's customer records."""
    session = MenuSession(build_restaurant(), random.Random(seed), output_format)
    restaurant = session.restaurant

    username = name.strip() if name and name.strip() else prompt_name("Enter your name")
    typer.echo(f"Welcome to {restaurant.name}, {username}! Choose from the options below.")

    while True:
        typer.echo("")
        typer.echo("=== Customer Records Management ===")
        for key, label in MENU:
            typer.echo(f"{key} | {label}")
        choice = prompt_int("Enter choice", 0)
        typer.echo("")

        if choice == 0:
            typer.echo(f"Thank you for using {restaurant.name}'s Customer Record Manager. Goodbye!")
            return
        handler = _HANDLERS.get(choice)
        if handler is None:
            typer.echo("Invalid choice. Please try again.")
            continue
        handler(session)


# =============================================================================
# Menu actions
# =============================================================================

def add_customer(session: MenuSession) -> None:
    restaurant = session.restaurant
    typer.echo("=== Create Customer Record ===")
    registry = restaurant.registry
    if not registry.can_add():
        typer.echo("Sorry! The restaurant's customer record limit has been reached.")
        return

    category = _prompt_category(restaurant)
    last_name = prompt_name("Enter last name")
    first_name = prompt_name("Enter first name")
    if category is Category.REGULAR:
        points = prompt_int("Enter loyalty points", 0)
        result = registry.add_customer(
            category, first_name=first_name, last_name=last_name, loyalty_points=points
        )
    else:
        minimum = CRM_SETTINGS.minimum_deposit
        deposit = prompt_float(f"Enter deposit (at least Php{minimum:.0f})", minimum)
        result = registry.add_customer(
            category, first_name=first_name, last_name=last_name, deposit=deposit
        )

    if not result.ok:
        typer.echo(_error_message(result.error, restaurant.registry.label(category)))
        return
    typer.echo(f"Customer {result.record.code} was added to the record!")
    show_customer(result.record, session.fmt)


def find_customer(session: MenuSession) -> None:
    restaurant = session.restaurant
    typer.echo("=== Search Customer Record ===")
    customer = _lookup(restaurant, "search")
    if customer is not None:
        show_customer(customer, session.fmt)


def view_records(session: MenuSession) -> None:
    restaurant = session.restaurant
    typer.echo("--- Restaurant Record ---")
    typer.echo(format_table(
        [{"name": restaurant.name, "total_sales": restaurant.total_sales}],
        [("Name", "name"), ("Total Sales", "total_sales")],
        session.fmt,
    ))
    for category in restaurant.registry.categories:
        typer.echo("")
        typer.echo(f"--- {restaurant.registry.label(category)}s ---")
        rows = restaurant.registry.list_customers(category)
        if not rows:
            typer.echo("Sorry! No records to show.")
            continue
        typer.echo(format_table(rows, COLUMNS[category], session.fmt))


def simulate_sales(session: MenuSession) -> None:
    restaurant = session.restaurant
    result = restaurant.simulate_sales(session.rng)
    if not result.ran:
        typer.echo(result.skipped)
        return

    typer.echo("=== Simulation Start ===")
    for tx in result.transactions:
        typer.echo("")
        typer.echo(f"--- {tx.customer_name} trying to buy food worth P{tx.amount:.2f}")
        typer.echo(tx.message)
    typer.echo("")
    view_records(session)
    typer.echo("=== Simulation End ===")


def update_customer(session: MenuSession) -> None:
    restaurant = session.restaurant
    typer.echo("=== Update Customer Record ===")
    customer = _lookup(restaurant, "update")
    if customer is None:
        return
    show_customer(customer, session.fmt)

    last_name = prompt_name(f"Enter new last name ('{KEEP_TOKEN}' to keep)")
    first_name = prompt_name(f"Enter new first name ('{KEEP_TOKEN}' to keep)")
    fields = resolve_keep(customer, first_name=first_name, last_name=last_name)

    error = restaurant.registry.update_customer(customer.code, **fields)
    if error is not None:
        typer.echo(_error_message(error))
        return
    typer.echo(f"Successfully updated customer {customer.code}!")


def delete_customer(session: MenuSession) -> None:
    restaurant = session.restaurant
    typer.echo("=== Remove Customer Record ===")
    customer = _lookup(restaurant, "remove")
    if customer is None:
        return
    show_customer(customer, session.fmt)

    if not confirm_letter("Are you sure you want to delete this customer record? (Y to confirm)"):
        typer.echo(f"Cancelled deletion of customer record {customer.code}.")
        return

    error = restaurant.registry.delete_customer(customer.code)
    if error is not None:
        typer.echo(_error_message(error))
        return
    typer.echo(f"Successfully deleted customer record {customer.code}.")


_HANDLERS = {
    1: add_customer,
    2: find_customer,
    3: view_records,
    4: simulate_sales,
    5: update_customer,
    6: delete_customer,
}


# =============================================================================
# Helpers
# =============================================================================

def show_customer(customer: Customer, fmt: OutputFormat = OutputFormat.HUMAN) -> None:
    typer.echo("")
    typer.echo(format_result(customer.to_dict(), fmt=fmt, title="Customer"))


def _lookup(restaurant: Restaurant, action: str) -> Optional[Customer]:
    registry = restaurant.registry
    if registry.count() == 0:
        typer.echo(f"Sorry! There are no customer records to {action}.")
        return None

    low, high = registry.code_range()
    code = prompt_int("Enter customer code", low, high)
    customer = registry.find_customer(code)
    if customer is None:
        typer.echo(_error_message(StoreError.NOT_FOUND))
    return customer


def _prompt_category(restaurant: Restaurant) -> Category:
    categories = [
        c for c in restaurant.registry.categories if restaurant.registry.can_add(c)
    ]
    if len(restaurant.registry.categories) == 1:
        return categories[0]

    typer.echo("Select Customer Type:")
    for c in categories:
        typer.echo(f"{c.letter} | {restaurant.registry.label(c)}")
    letter = prompt_choice("Enter choice", "".join(c.letter for c in categories))
    return Category.from_letter(letter)


def _error_message(error: Optional[StoreError], label: str = "customer") -> str:
    if error == StoreError.CAPACITY_EXCEEDED:
        return f"Sorry! The {label} record limit has been reached."
    if error == StoreError.NOT_FOUND:
        return NOT_FOUND_MSG
    return "Sorry! The operation could not be completed."
