from __future__ import annotations

import logging
from typing import List

from .config import TITLE_MAX_LENGTH
from .guard import require_owned_board
from .models import Board
from .store import BOARDS, CARDS, LISTS, RecordStore
from .utils import clean_text, logged_failure, new_uuid, now_utc

logger = logging.getLogger(__name__)


def create_board(store: RecordStore, title: str, user_id: str) -> Board:
    logger.info("Creating board %r for user %s", title, user_id)
    with logged_failure(logger, "create board"):
        now = now_utc()
        board = Board(
            id=new_uuid(),
            title=clean_text(title, "title", TITLE_MAX_LENGTH),
            owner_id=user_id,
            created_at=now,
            updated_at=now,
            list_order=[],
        )
        store.insert(BOARDS, board)
    logger.info("Board created successfully: %s", board.id)
    return board


def boards_for_user(store: RecordStore, user_id: str) -> List[Board]:
    """Boards owned by ``user_id``, most recent first."""
    with logged_failure(logger, f"fetch boards for user {user_id}"):
        boards = list(reversed(store.find(BOARDS, "owner_id", user_id)))
    logger.debug("Found %d boards for user %s", len(boards), user_id)
    return boards


def get_board(store: RecordStore, board_id: str, user_id: str) -> Board:
    with logged_failure(logger, f"fetch board {board_id}"):
        return require_owned_board(store, board_id, user_id)


def delete_board(store: RecordStore, board_id: str, user_id: str) -> bool:
    """Delete a board with all of its lists and cards."""
    logger.info("Deleting board %s for user %s", board_id, user_id)
    with logged_failure(logger, f"delete board {board_id}"):
        require_owned_board(store, board_id, user_id)
        for board_list in store.find(LISTS, "board_id", board_id):
            for card in store.find(CARDS, "list_id", board_list.id):
                store.delete(CARDS, card.id)
            store.delete(LISTS, board_list.id)
        store.delete(BOARDS, board_id)
    logger.info("Board %s deleted successfully", board_id)
    return True
