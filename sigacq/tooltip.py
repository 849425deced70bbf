"""Tool tip text for actions, with their keyboard shortcut appended."""

from __future__ import annotations


def format_tool_tip(tool_tip: str, shortcut: str | None) -> str | None:
    """Return the tool tip to show, or ``None`` when there is nothing to show."""
    text = tool_tip or ""
    if shortcut:
        text += f" <b>[{shortcut}]</b>"
    return text or None