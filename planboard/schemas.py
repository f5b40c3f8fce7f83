from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel

from .models import Board, BoardList, Card


class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class Health(BaseModel):
    status: str = "ok"


# Text limits are enforced by the core so every caller gets the same rules.


class BoardIn(BaseModel):
    title: str


class BoardOut(BaseModel):
    id: str
    title: str
    ownerId: str
    listOrder: list[str]
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_record(cls, board: Board) -> BoardOut:
        return cls(
            id=board.id,
            title=board.title,
            ownerId=board.owner_id,
            listOrder=list(board.list_order),
            createdAt=board.created_at,
            updatedAt=board.updated_at,
        )


class BoardsPage(BaseModel):
    boards: list[BoardOut]


class ListIn(BaseModel):
    title: str


class ListPatch(BaseModel):
    title: Optional[str] = None


class ListMove(BaseModel):
    newIndex: int


class ListOut(BaseModel):
    id: str
    title: str
    boardId: str
    cardOrder: list[str]
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_record(cls, board_list: BoardList) -> ListOut:
        return cls(
            id=board_list.id,
            title=board_list.title,
            boardId=board_list.board_id,
            cardOrder=list(board_list.card_order),
            createdAt=board_list.created_at,
            updatedAt=board_list.updated_at,
        )


class CardIn(BaseModel):
    content: str


class CardPatch(BaseModel):
    content: Optional[str] = None


class CardMove(BaseModel):
    sourceListId: str
    destListId: str
    newIndex: int


class CardOut(BaseModel):
    id: str
    content: str
    listId: str
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_record(cls, card: Card) -> CardOut:
        return cls(
            id=card.id,
            content=card.content,
            listId=card.list_id,
            createdAt=card.created_at,
            updatedAt=card.updated_at,
        )
