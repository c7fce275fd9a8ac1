"""Validation reporting with multiple export formats."""

from __future__ import annotations

import json
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd
from jinja2 import Template
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.validator import ValidationResult


class ValidationReporter:
    """Render a ValidationResult to the console, JSON, HTML or a DataFrame."""

    def __init__(self, result: ValidationResult) -> None:
        self.result = result

    def to_console(self, verbose: bool = False, console: Console | None = None) -> None:
        """
        Print formatted validation report to console using rich.

        Args:
            verbose: Include a message frequency table
            console: Optional custom Console instance
        """
        console = console or Console()
        total_errors = len(self.result.errors)

        summary = Table(title="Validation Summary", show_header=True, header_style="bold magenta")
        summary.add_column("Metric", style="cyan", width=20)
        summary.add_column("Value", style="white", width=30)

        status_text = Text("VALID", style="bold green") if self.result.is_valid else Text("INVALID", style="bold red")
        summary.add_row("Status", status_text)
        summary.add_row("Total Errors", str(total_errors))

        console.print(summary)
        console.print()

        if total_errors == 0:
            return

        error_table = Table(title="Errors by Field", show_header=True)
        error_table.add_column("Field", style="yellow")
        error_table.add_column("Message", style="red", overflow="fold")
        for name, message in self.result.errors.items():
            error_table.add_row(name, message)

        console.print(error_table)
        console.print()

        if verbose:
            messages = Counter(self.result.errors.values())
            top_errors = Table(title="Top 10 Error Messages", show_header=True)
            top_errors.add_column("Error Message", style="red", overflow="fold")
            top_errors.add_column("Count", style="red", justify="right")
            for msg, count in messages.most_common(10):
                top_errors.add_row(msg, str(count))

            console.print(top_errors)
            console.print()

    def to_json(self, filepath: Path | str, indent: int = 2) -> None:
        """
        Export validation result as JSON.

        Args:
            filepath: Output path for JSON file
            indent: JSON indentation level
        """
        filepath = Path(filepath)

        data = {
            "is_valid": self.result.is_valid,
            "summary": {
                "total_errors": len(self.result.errors),
            },
            "errors": [
                {"field": name, "message": message}
                for name, message in self.result.errors.items()
            ],
            "timestamp": datetime.now().isoformat(),
        }

        filepath.write_text(json.dumps(data, indent=indent, ensure_ascii=False), encoding="utf-8")

    def to_html(self, filepath: Path | str, title: str = "Validation Report") -> None:
        """Write a single-page HTML report."""
        filepath = Path(filepath)
        html_content = self._render_html_template(
            title=title,
            is_valid=self.result.is_valid,
            total_errors=len(self.result.errors),
            errors=[{"field": name, "message": message} for name, message in self.result.errors.items()],
            timestamp=datetime.now().isoformat(),
        )
        filepath.write_text(html_content, encoding="utf-8")

    def to_dataframe(self) -> pd.DataFrame:
        """
        Convert errors to DataFrame for analysis.

        Returns:
            DataFrame with columns: field, message
        """
        if not self.result.errors:
            return pd.DataFrame(columns=["field", "message"])

        records = [{"field": name, "message": message} for name, message in self.result.errors.items()]
        return pd.DataFrame(records)

    def _render_html_template(self, **context: Any) -> str:
        template = Template(HTML_TEMPLATE)
        return template.render(**context)


HTML_TEMPLATE = """
<!DOCTYPE html>
<html lang="fr">
<head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <style>
        body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; margin: 0; background: #f9fafb; }
        .header { background: {% if is_valid %}#10b981{% else %}#ef4444{% endif %}; color: white; padding: 32px; text-align: center; }
        .section { padding: 32px; }
        table { width: 100%; border-collapse: collapse; background: white; }
        th, td { padding: 12px; text-align: left; border-bottom: 1px solid #e5e7eb; }
        th { text-transform: uppercase; font-size: 0.85em; color: #374151; }
        .footer { padding: 16px 32px; color: #6b7280; font-size: 0.9em; }
    </style>
</head>
<body>
    <div class="header">
        <h1>{{ title }}</h1>
        <div>{% if is_valid %}VALID{% else %}INVALID{% endif %}</div>
    </div>
    <div class="section">
        <h2>Total Errors: {{ total_errors }}</h2>
        {% if errors %}
        <table>
            <thead><tr><th>Field</th><th>Message</th></tr></thead>
            <tbody>
                {% for error in errors %}
                <tr><td>{{ error.field }}</td><td>{{ error.message }}</td></tr>
                {% endfor %}
            </tbody>
        </table>
        {% endif %}
    </div>
    <div class="footer">Generated by mdc-validator on {{ timestamp }}</div>
</body>
</html>
"""
