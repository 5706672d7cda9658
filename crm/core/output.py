"""
Output formatters for CLI display.

Supports human-readable, JSON, and markdown output modes.
"""

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Spaces added after the widest value of each table column
PADDING = 2


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    MARKDOWN = "markdown"


def format_result(
    result: Any,
    fmt: OutputFormat = OutputFormat.HUMAN,
    title: Optional[str] = None,
) -> str:
    """Format a single record or mapping for display."""
    if fmt == OutputFormat.JSON:
        return _format_json(result)
    elif fmt == OutputFormat.MARKDOWN:
        return _format_markdown(result, title)
    else:
        return _format_human(result, title)


def format_table(
    rows: Sequence[Any],
    columns: Sequence[Tuple[str, str]],
    fmt: OutputFormat = OutputFormat.HUMAN,
) -> str:
    """
    Format an ordered sequence of records as a table.

    Args:
        rows: Records (dataclasses, objects or dicts), rendered in the given order
        columns: (header, attribute) pairs; attribute is looked up on each row
        fmt: Output format

    Returns:
        Table text. Human tables size every column to its longest cell plus PADDING.
    """
    cells = [[_cell(_lookup(row, attr)) for _, attr in columns] for row in rows]
    headers = [header for header, _ in columns]

    if fmt == OutputFormat.JSON:
        records = [dict(zip([attr for _, attr in columns], (_lookup(r, a) for _, a in columns)))
                   for r in rows]
        return json.dumps(records, indent=2, default=str)

    if fmt == OutputFormat.MARKDOWN:
        lines = [
            "| " + " | ".join(headers) + " |",
            "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
        ]
        lines.extend("| " + " | ".join(row) + " |" for row in cells)
        return "\n".join(lines)

    widths = [
        max([len(h)] + [len(row[i]) for row in cells]) + PADDING
        for i, h in enumerate(headers)
    ]
    lines = ["".join(f"{h:<{w}}" for h, w in zip(headers, widths)).rstrip()]
    for row in cells:
        lines.append("".join(f"{c:<{w}}" for c, w in zip(row, widths)).rstrip())
    return "\n".join(lines)


def _lookup(row: Any, attr: str) -> Any:
    if isinstance(row, dict):
        return row.get(attr)
    return getattr(row, attr, None)


def _cell(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return f"{value:.2f}"
    return "" if value is None else str(value)


def _to_dict(result: Any) -> Dict:
    if is_dataclass(result):
        data = asdict(result)
    elif hasattr(result, "__dict__"):
        data = dict(result.__dict__)
    elif isinstance(result, dict):
        data = result
    else:
        return {"value": str(result)}
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in data.items()}


def _format_json(result: Any) -> str:
    return json.dumps(_to_dict(result), indent=2, default=str)


def _format_human(result: Any, title: Optional[str] = None) -> str:
    lines: List[str] = []
    if title:
        lines.extend([title, "=" * len(title), ""])

    data = _to_dict(result)
    max_key_len = max(len(str(k)) for k in data.keys()) if data else 0

    for key, value in data.items():
        label = key.replace("_", " ").title()
        if isinstance(value, float):
            formatted = f"{value:,.2f}"
        elif isinstance(value, list):
            formatted = "\n".join(f"  - {v}" for v in value) if value else "(none)"
            if value:
                formatted = "\n" + formatted
        else:
            formatted = str(value)
        lines.append(f"{label:<{max_key_len + 2}}: {formatted}")

    return "\n".join(lines)


def _format_markdown(result: Any, title: Optional[str] = None) -> str:
    lines = []
    if title:
        lines.extend([f"# {title}", ""])

    data = _to_dict(result)
    lines.extend(["| Field | Value |", "|-------|-------|"])

    for key, value in data.items():
        label = key.replace("_", " ").title()
        if isinstance(value, float):
            formatted = f"{value:,.2f}"
        elif isinstance(value, list):
            formatted = ", ".join(str(v) for v in value) if value else "-"
        else:
            formatted = str(value)
        lines.append(f"| {label} | {formatted} |")

    return "\n".join(lines)
