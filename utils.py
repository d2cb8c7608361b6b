# utils.py
from __future__ import annotations

from typing import Optional


# ---------------------------------------------------------------------------
# Display helpers shared by the renderer and the templates
# ---------------------------------------------------------------------------

def truncate_text(text: Optional[str], max_length: int) -> str:
    """
    Shortens text to ``max_length`` characters, appending "..." when cut.

    Args:
        text: The text to shorten; None renders as an empty string.
        max_length: Number of characters kept before the ellipsis.
    """
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_price(price: Optional[float]) -> str:
    return f"{price or 0:.2f}"


def plain_number(value: Optional[float]):
    """Whole floats as int (25.0 -> 25), everything else unchanged; keeps full precision."""
    number = value or 0
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def parse_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


__all__ = [
    "truncate_text",
    "format_price",
    "plain_number",
    "parse_int",
]
