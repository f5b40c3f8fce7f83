from __future__ import annotations

from .errors import Forbidden, NotFound
from .models import Board, BoardList, Card
from .store import BOARDS, CARDS, LISTS, RecordStore


def require_owned_board(store: RecordStore, board_id: str, user_id: str) -> Board:
    """Load a board and check ``user_id`` owns it.

    This is the only authorization check; list and card operations resolve
    their board and come through here.
    """
    board = store.get(BOARDS, board_id)
    if board is None:
        raise NotFound(f"Board with ID {board_id} not found", {"boardId": board_id})
    if board.owner_id != user_id:
        raise Forbidden(
            "You do not have permission to access this board", {"boardId": board_id}
        )
    return board


def load_list(store: RecordStore, list_id: str, role: str = "List") -> BoardList:
    board_list = store.get(LISTS, list_id)
    if board_list is None:
        raise NotFound(f"{role} with ID {list_id} not found", {"listId": list_id})
    return board_list


def load_card(store: RecordStore, card_id: str) -> Card:
    card = store.get(CARDS, card_id)
    if card is None:
        raise NotFound(f"Card with ID {card_id} not found", {"cardId": card_id})
    return card
