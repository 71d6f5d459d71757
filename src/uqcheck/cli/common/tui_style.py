"""Questionary / prompt_toolkit theme for uqcheck.

Questionary uses prompt_toolkit under the hood. The palette follows the
rich theme in `output.py` (cyan titles, green for selected items) so the
interactive table picker and the regular output look alike.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold ansicyan",
        "answer": "bold ansigreen",
        "pointer": "bold ansigreen",
        "highlighted": "bold ansigreen",
        "selected": "ansigreen",
        "checkbox": "ansibrightblack",
        "checkbox-selected": "bold ansigreen",
        "instruction": "ansibrightblack",
        "disabled": "ansibrightblack",
    }
)
