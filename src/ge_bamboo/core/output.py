# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2025 The Linux Foundation

"""Output formatting for ge-bamboo CLI commands."""

import json
import sys
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.table import Table

console = Console()


def format_and_output(
    data: List[Dict[str, Any]],
    output_format: str = "table",
    table_config: Optional[Dict[str, Any]] = None
) -> None:
    """Format and output data.

    Args:
        data: Data to output
        output_format: Format to use (table, json, json-pretty, yaml)
        table_config: Configuration for table output (columns, title)
    """
    if output_format == "json":
        print(json.dumps(data, separators=(',', ':')), file=sys.stdout)
    elif output_format == "json-pretty":
        print(json.dumps(data, indent=2), file=sys.stdout)
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False), file=sys.stdout, end="")
    elif output_format == "table":
        _output_table(data, table_config or {})
    else:
        raise ValueError(f"Unsupported output format: {output_format}")


def _output_table(data: List[Dict[str, Any]], config: Dict[str, Any]) -> None:
    """Output data as a rich table."""
    columns = config.get("columns") or _auto_detect_columns(data)
    if not data and not columns:
        console.print("[yellow]No data to display[/yellow]")
        return

    table = Table(title=config.get("title", ""))
    for col in columns:
        if isinstance(col, dict):
            table.add_column(
                col.get("name", ""),
                style=col.get("style", ""),
                no_wrap=col.get("no_wrap", False),
            )
        else:
            table.add_column(str(col).replace('_', ' ').title())

    for item in data:
        row_values = []
        for col in columns:
            field_name = col.get("field", col.get("name", "")) if isinstance(col, dict) else str(col)
            row_values.append(_format_field_value(item.get(field_name)))
        table.add_row(*row_values)

    console.print(table)


def _auto_detect_columns(data: List[Dict[str, Any]]) -> List[str]:
    """Automatically detect columns from data, keeping first-seen order."""
    columns: List[str] = []
    for item in data:
        for key in item:
            if key not in columns:
                columns.append(key)
    return columns


def _format_field_value(value: Any) -> str:
    """Format a field value for display."""
    if value is None:
        return ""

    if isinstance(value, bool):
        return "Yes" if value else "No"

    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "None"

    return str(value)


def mask_secret(value: Optional[str]) -> str:
    """Mask a secret for display, keeping its last four characters."""
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return "****" + value[-4:]
