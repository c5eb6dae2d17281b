"""Terminal UI utilities for bqctx."""

from __future__ import annotations

import questionary

from bqcontext.cli.common.tui_style import QUESTIONARY_STYLE_SELECT

_MAX_TABLE_NAME_WIDTH = 96


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _table_choice_title(candidate: str) -> str:
    """Format one table choice; the all-tables sentinel stays verbatim."""
    return _truncate(candidate, _MAX_TABLE_NAME_WIDTH)


def select_table(candidates: list[str]) -> str | None:
    """Display a single-choice prompt over table names.

    Args:
        candidates: Names to choose from (`all-tables` and `dataset.table`).

    Returns:
        The chosen name, or None if nothing was chosen.
    """
    if not candidates:
        return None

    choices = [
        questionary.Choice(title=_table_choice_title(c), value=c) for c in candidates
    ]
    return questionary.select(
        "Select table:",
        choices=choices,
        style=QUESTIONARY_STYLE_SELECT,
        instruction="Use ↑/↓ then Enter",
    ).ask()
