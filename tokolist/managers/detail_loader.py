"""Loads a single record (e.g. one purchase) together with its line items."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from tokolist.core.protocols import DetailSource, RecordKey
from tokolist.errors import raise_for_payload
from tokolist.utils.records import filter_valid_items
from tokolist.utils.response_normalizer import normalize

logger = logging.getLogger("TokoList.DetailLoader")


@dataclass(frozen=True)
class RecordDetail:
    info: Dict[str, Any] = field(default_factory=dict)
    items: List[Any] = field(default_factory=list)


class DetailLoader:
    def __init__(self, source: DetailSource, valid_only: bool = True):
        self.source = source
        self.valid_only = valid_only

    async def load(self, record_id: RecordKey) -> RecordDetail:
        raw = await self.source.fetch_detail(record_id)
        raise_for_payload(raw)

        normalized = normalize(raw)
        items = normalized.items
        if self.valid_only:
            items = filter_valid_items(items)
            if len(items) != len(normalized.items):
                logger.info(
                    "Record %s: kept %d of %d line items",
                    record_id,
                    len(items),
                    len(normalized.items),
                )
        info = {
            key: value
            for key, value in normalized.info.items()
            if not isinstance(value, (list, dict))
        }
        return RecordDetail(info=info, items=items)
