"""
Console input helpers for the customer menu.

Every helper loops until it has a valid value, so the registry only ever
receives sanitized input.
"""

from typing import Any, Dict, Optional

import typer

from crm.core.config import CRM_SETTINGS

KEEP_TOKEN = CRM_SETTINGS.keep_token


def resolve_keep(record: Any, keep: Optional[str] = None, **inputs: Any) -> Dict[str, Any]:
    """
    Turn raw update inputs into the final values to write.

    Any input equal to the keep token is replaced by the record's current value.

    Example:
        resolve_keep(customer, first_name="---", last_name="Reyes")
        -> {"first_name": customer.first_name, "last_name": "Reyes"}
    """
    keep = KEEP_TOKEN if keep is None else keep
    return {
        name: getattr(record, name) if value == keep else value
        for name, value in inputs.items()
    }


def prompt_int(text: str, minimum: int, maximum: Optional[int] = None) -> int:
    while True:
        value = typer.prompt(text, type=int)
        if minimum <= value and (maximum is None or value <= maximum):
            return value
        if maximum is None:
            typer.echo(f"Invalid input. Please enter an integer greater than or equal to {minimum}.")
        else:
            typer.echo(f"Invalid input. Please enter an integer between {minimum} and {maximum}.")


def prompt_float(text: str, minimum: float) -> float:
    while True:
        value = typer.prompt(text, type=float)
        if value >= minimum:
            return value
        typer.echo(f"Invalid input. Please enter an amount of at least {minimum:.2f}.")


def prompt_name(text: str) -> str:
    while True:
        value = typer.prompt(text).strip()
        if value:
            return value
        typer.echo("Please enter a valid nonempty name.")


def prompt_choice(text: str, choices: str) -> str:
    """Ask for one letter out of ``choices`` (case-insensitive)."""
    allowed = choices.upper()
    while True:
        value = typer.prompt(text).strip().upper()
        if len(value) == 1 and value in allowed:
            return value
        typer.echo("Invalid choice. Please try again.")


def confirm_letter(text: str, letter: str = "Y") -> bool:
    """True only when the user types ``letter``; anything else cancels."""
    answer = typer.prompt(text, default="", show_default=False)
    return answer.strip().upper() == letter.upper()
