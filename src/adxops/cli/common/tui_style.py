"""Questionary / prompt_toolkit theme for ADX-OPS.

Questionary uses prompt_toolkit under the hood. This module defines the
central style used by the confirmation prompt shown before resources are
created, so it matches the rich console palette.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_CONFIRM = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold ansibrightcyan",
        "answer": "bold ansibrightgreen",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)
