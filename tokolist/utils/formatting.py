"""Text formatting utilities."""

import math
from typing import Any


def _to_number(value: Any):
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_rupiah(value: Any) -> str:
    number = _to_number(value)
    if number is None or not math.isfinite(number):
        return "Rp 0"
    return "Rp " + f"{round(number):,}".replace(",", ".")


def format_quantity(value: Any) -> str:
    number = _to_number(value)
    if number is None or not math.isfinite(number) or number <= 0:
        return "0"
    if number.is_integer():
        return str(int(number))
    return f"{number:.2f}".rstrip("0").rstrip(".")


def truncate_text(text: str, max_length: int = 100) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_status_line(state) -> str:
    """Summary shown under a list, e.g. ``Showing 10 of 25 items • Page 1/3``."""
    pagination = state.pagination
    return (
        f"Showing {len(state.visible_items)} of {pagination.total} items"
        f" • Page {pagination.page}/{max(pagination.total_pages, 1)}"
    )
