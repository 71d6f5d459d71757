"""Terminal UI utilities for picking tables to check."""

from __future__ import annotations

from typing import Mapping

import questionary

from uqcheck.cli.common.tui_style import QUESTIONARY_STYLE_SELECT

_MAX_TABLE_NAME_WIDTH = 64


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _table_choice_title(table: str, rule_count: int, *, name_width: int) -> str:
    """Format one table choice as `<table>  (rules: <n>)` with aligned count column."""
    short_name = _truncate(table, _MAX_TABLE_NAME_WIDTH)
    return f"{short_name.ljust(name_width)}  (rules: {rule_count})"


def select_tables(rule_counts: Mapping[str, int]) -> list[str]:
    """Display a checkbox prompt to select tables from a list.

    Args:
        rule_counts: Table names mapped to the number of rules declared on them.

    Returns:
        The selected table names, or an empty list if none selected.
    """
    shown_names = [_truncate(t, _MAX_TABLE_NAME_WIDTH) for t in rule_counts]
    name_width = max((len(name) for name in shown_names), default=0)

    choices = [
        questionary.Choice(
            title=_table_choice_title(table, count, name_width=name_width),
            value=table,
            checked=True,
        )
        for table, count in rule_counts.items()
    ]

    return (
        questionary.checkbox(
            "Select tables to check:",
            choices=choices,
            style=QUESTIONARY_STYLE_SELECT,
        ).ask()
        or []
    )
