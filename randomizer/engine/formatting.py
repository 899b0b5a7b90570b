"""Message formatting helpers (Slack-flavored markdown)."""

from __future__ import annotations

from typing import Iterable

BULLET = "•"


def bulletize(items: Iterable[str]) -> str:
    """One "• item" line per item, no trailing newline."""
    return "\n".join(f"{BULLET} {item}" for item in items)


def embolden(item: str) -> str:
    return f"*{item}*"


def inline_list(items: Iterable[str]) -> str:
    """*a*, *b*, *c*"""
    return ", ".join(embolden(item) for item in items)


def sorted_bullets(items: Iterable[str]) -> str:
    return bulletize(sorted(items))


def quoted(text: str) -> str:
    """Double-quoted with backslash escapes, for names echoed back to users."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
