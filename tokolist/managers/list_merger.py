"""Merging fetched pages into an accumulated collection."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Sequence

from tokolist.utils.records import record_id


class MergeMode(Enum):
    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class MergeResult:
    items: List[Any] = field(default_factory=list)
    added: int = 0
    dropped: int = 0

    @property
    def all_dropped(self) -> bool:
        """True when a non-empty page contributed nothing new."""
        return self.added == 0 and self.dropped > 0


def dedup(incoming: Iterable[Any], existing_ids: set, key: str = "id") -> List[Any]:
    """Drop records whose id is already known, including repeats within the page.

    Records without an id cannot be matched and are always kept.
    """
    seen = set(existing_ids)
    fresh = []
    for record in incoming:
        rid = record_id(record, key)
        if rid is None:
            fresh.append(record)
            continue
        if rid in seen:
            continue
        seen.add(rid)
        fresh.append(record)
    return fresh


def merge_page(
    existing: Sequence[Any],
    incoming: Sequence[Any],
    mode: MergeMode,
    key: str = "id",
) -> MergeResult:
    if mode is MergeMode.REPLACE:
        return MergeResult(items=list(incoming), added=len(incoming))

    existing_ids = {record_id(record, key) for record in existing} - {None}
    fresh = dedup(incoming, existing_ids, key)
    return MergeResult(
        items=list(existing) + fresh,
        added=len(fresh),
        dropped=len(incoming) - len(fresh),
    )


def merge(
    existing: Sequence[Any],
    incoming: Sequence[Any],
    mode: MergeMode,
    key: str = "id",
) -> List[Any]:
    return merge_page(existing, incoming, mode, key).items
