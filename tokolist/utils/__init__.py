"""Utility functions."""

from .formatting import format_quantity, format_rupiah, format_status_line, truncate_text
from .records import filter_valid_items, is_valid_item, record_id
from .response_normalizer import EnvelopeShape, NormalizedPage, normalize

__all__ = [
    "format_rupiah",
    "format_quantity",
    "format_status_line",
    "truncate_text",
    "filter_valid_items",
    "is_valid_item",
    "record_id",
    "EnvelopeShape",
    "NormalizedPage",
    "normalize",
]
