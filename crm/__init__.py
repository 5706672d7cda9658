"""
CRM - Restaurant Customer Record Manager

In-memory customer records for a single restaurant.

Modules:
    core        - Shared services (config, logging, output)
    records     - Bounded, code-keyed record store
    customers   - Customer categories, registry, restaurant sales, menu
    cli         - Typer entry point
"""

__version__ = "0.1.0"
