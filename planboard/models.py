from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Union


# === Records kept by the record store ===
# Parents reference children by id only; order arrays live on the parent.


@dataclass
class Board:
    id: str
    title: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    list_order: List[str] = field(default_factory=list)


@dataclass
class BoardList:
    id: str
    title: str
    board_id: str
    created_at: datetime
    updated_at: datetime
    card_order: List[str] = field(default_factory=list)


@dataclass
class Card:
    id: str
    content: str
    list_id: str
    created_at: datetime
    updated_at: datetime


Record = Union[Board, BoardList, Card]
