"""Helpers for schema-free record mappings."""

from typing import Any, Iterable, List, Optional

DISPLAY_FIELDS = ("nama_produk", "nama", "harga_beli", "quantity")


def record_id(record: Any, key: str = "id") -> Optional[Any]:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def is_valid_item(item: Any) -> bool:
    """A detail line is worth showing if it carries any displayable field."""
    if not isinstance(item, dict):
        return False
    return any(item.get(name) for name in DISPLAY_FIELDS)


def filter_valid_items(items: Iterable[Any]) -> List[Any]:
    return [item for item in items if is_valid_item(item)]
