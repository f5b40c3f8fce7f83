"""
Ordered membership over a parent's id array.

Boards order their lists in ``list_order`` and lists order their cards in
``card_order``. Both are handled by the helpers below, parameterized by an
``OrderField`` naming the parent collection and the array field.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .errors import InvalidArgument
from .models import Record
from .store import BOARDS, LISTS, RecordStore


@dataclass(frozen=True)
class OrderField:
    collection: str
    field: str
    member: str


BOARD_LISTS = OrderField(BOARDS, "list_order", "list")
LIST_CARDS = OrderField(LISTS, "card_order", "card")


def check_index(index: object, upper: int) -> int:
    """Accept ``index`` only if it is an int within ``[0, upper]``."""
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidArgument("index must be an integer", {"index": index})
    if index < 0 or index > upper:
        raise InvalidArgument(
            f"Invalid index: {index}. Must be between 0 and {upper}",
            {"index": index, "min": 0, "max": upper},
        )
    return index


def without(order: Sequence[str], member_id: str, target: OrderField) -> List[str]:
    """Copy of ``order`` with ``member_id`` removed from its current position."""
    remaining = list(order)
    try:
        remaining.remove(member_id)
    except ValueError:
        raise InvalidArgument(
            f"{target.member} {member_id} is not in the {target.field}",
            {"id": member_id},
        ) from None
    return remaining


def inserted(order: Sequence[str], member_id: str, index: int) -> List[str]:
    result = list(order)
    result.insert(index, member_id)
    return result


def moved(order: Sequence[str], member_id: str, index: int, target: OrderField) -> List[str]:
    """Move ``member_id`` to ``index``, keeping everything else in relative order."""
    return inserted(without(order, member_id, target), member_id, index)


def append_member(store: RecordStore, target: OrderField, parent_id: str, member_id: str) -> Optional[Record]:
    return store.push(target.collection, parent_id, target.field, member_id)


def remove_member(store: RecordStore, target: OrderField, parent_id: str, member_id: str) -> Optional[Record]:
    return store.pull(target.collection, parent_id, target.field, member_id)


def write_order(store: RecordStore, target: OrderField, parent_id: str, order: Sequence[str]) -> Optional[Record]:
    return store.set_fields(target.collection, parent_id, **{target.field: list(order)})


def arrange(children: Sequence[Record], order: Sequence[str]) -> List[Record]:
    """Sort ``children`` by ``order``; children missing from it go last.

    Ids in ``order`` with no matching child are skipped.
    """
    by_id = {child.id: child for child in children}
    ordered = [by_id[child_id] for child_id in dict.fromkeys(order) if child_id in by_id]
    placed = {child.id for child in ordered}
    return ordered + [child for child in children if child.id not in placed]
