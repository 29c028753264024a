"""Normalize the backend's list envelopes into items plus pagination info.

Different endpoints of the backend wrap their records differently. The
shapes below are tried in order and the first match wins; later screens
depend on the earlier shapes taking precedence.

    1. {"data": {"data": [...], "pagination": {...}}}
    2. {"data": [...], "pagination": {...}}
    3. {"data": {"rows": [...], "page": .., "total": .., "totalPages": ..}}
    4. [...]
    5. {"data": {"items" | "detail" | "barang" | "produk" | "data": [...]}}
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

logger = logging.getLogger("TokoList.ResponseNormalizer")

CANDIDATE_KEYS = ("items", "detail", "barang", "produk", "data")

PAGINATION_KEYS = ("page", "limit", "total", "totalPages")


class EnvelopeShape(Enum):
    NESTED_DATA = "data.data"
    DATA_ARRAY = "data"
    NESTED_ROWS = "data.rows"
    BARE_ARRAY = "array"
    CANDIDATE_KEY = "data.<key>"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NormalizedPage:
    items: List[Any] = field(default_factory=list)
    pagination_info: Dict[str, Any] = field(default_factory=dict)
    info: Dict[str, Any] = field(default_factory=dict)
    shape: EnvelopeShape = EnvelopeShape.UNKNOWN

    @property
    def recognized(self) -> bool:
        return self.shape is not EnvelopeShape.UNKNOWN


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _pagination_from(source: Any) -> Dict[str, Any]:
    """Pick the pagination fields out of a mapping, folding ``totalPage``."""
    if not isinstance(source, dict):
        return {}
    info = {key: source[key] for key in PAGINATION_KEYS if key in source}
    if "totalPages" not in info and "totalPage" in source:
        info["totalPages"] = source["totalPage"]
    return info


def normalize(raw: Any, page: int = 1) -> NormalizedPage:
    """Extract ``(items, pagination_info)`` from a raw response body.

    Args:
        raw: Decoded JSON body.
        page: Page that was requested, used when a bare array carries no
            metadata of its own.

    Returns:
        NormalizedPage; an unrecognized body yields an empty page.
    """
    data = raw.get("data") if isinstance(raw, dict) else None

    if isinstance(data, dict) and _is_sequence(data.get("data")):
        return NormalizedPage(
            items=list(data["data"]),
            pagination_info=_pagination_from(data.get("pagination")),
            info=dict(data),
            shape=EnvelopeShape.NESTED_DATA,
        )

    if _is_sequence(data):
        return NormalizedPage(
            items=list(data),
            pagination_info=_pagination_from(raw.get("pagination")),
            info={k: v for k, v in raw.items() if k not in ("data", "pagination")},
            shape=EnvelopeShape.DATA_ARRAY,
        )

    if isinstance(data, dict) and _is_sequence(data.get("rows")):
        return NormalizedPage(
            items=list(data["rows"]),
            pagination_info=_pagination_from(data),
            info=dict(data),
            shape=EnvelopeShape.NESTED_ROWS,
        )

    if _is_sequence(raw):
        return NormalizedPage(
            items=list(raw),
            pagination_info={"page": page, "total": len(raw)},
            shape=EnvelopeShape.BARE_ARRAY,
        )

    if isinstance(data, dict):
        for key in CANDIDATE_KEYS:
            if _is_sequence(data.get(key)):
                return NormalizedPage(
                    items=list(data[key]),
                    pagination_info=_pagination_from(data.get("pagination")),
                    info=dict(data),
                    shape=EnvelopeShape.CANDIDATE_KEY,
                )

    logger.warning("Unrecognized response shape: %s", type(raw).__name__)
    return NormalizedPage()
