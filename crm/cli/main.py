"""
CRM CLI - Main Entry Point

Unified Typer CLI that assembles all module sub-commands.

Usage:
    crm version
    crm customers manage
"""

import typer

import crm

app = typer.Typer(
    name="crm",
    help="Restaurant customer record manager.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show CRM version."""
    typer.echo(f"crm {crm.__version__}")


def _register_modules():
    """Register module CLI sub-apps."""
    from crm.customers.cli import app as customers_app

    app.add_typer(customers_app, name="customers", help="Customer records & sales")


_register_modules()


def main():
    """Entry point for the crm CLI."""
    app()


if __name__ == "__main__":
    main()
