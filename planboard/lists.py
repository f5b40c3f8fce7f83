"""List operations and the board's ``list_order``."""

from __future__ import annotations

import logging
from typing import Optional

from .config import TITLE_MAX_LENGTH
from .errors import InvalidArgument, NotFound
from .guard import load_list, require_owned_board
from .models import Board, BoardList
from .ordering import BOARD_LISTS, append_member, check_index, moved, remove_member, write_order
from .store import CARDS, LISTS, RecordStore
from .utils import clean_text, logged_failure, new_uuid, now_utc

logger = logging.getLogger(__name__)


def create_list(store: RecordStore, board_id: str, title: str, user_id: str) -> BoardList:
    """Insert a list and append it to the board's ``list_order``.

    The two writes are not transactional. If the append fails, the list
    still exists and shows up at the end of ``lists_for_board``.
    """
    logger.info("Creating list %r for board %s by user %s", title, board_id, user_id)
    with logged_failure(logger, f"create list on board {board_id}"):
        require_owned_board(store, board_id, user_id)
        now = now_utc()
        board_list = BoardList(
            id=new_uuid(),
            title=clean_text(title, "title", TITLE_MAX_LENGTH),
            board_id=board_id,
            created_at=now,
            updated_at=now,
            card_order=[],
        )
        store.insert(LISTS, board_list)
        if append_member(store, BOARD_LISTS, board_id, board_list.id) is None:
            logger.warning("Board %s vanished before list %s was appended", board_id, board_list.id)
    logger.info("List created successfully: %s", board_list.id)
    return board_list


def update_list(store: RecordStore, list_id: str, title: Optional[str], user_id: str) -> BoardList:
    logger.info("Updating list %s by user %s", list_id, user_id)
    with logged_failure(logger, f"update list {list_id}"):
        board_list = load_list(store, list_id)
        require_owned_board(store, board_list.board_id, user_id)
        changes = {}
        if title is not None:
            changes["title"] = clean_text(title, "title", TITLE_MAX_LENGTH)
        updated = store.set_fields(LISTS, list_id, **changes)
        if updated is None:
            raise NotFound(f"List with ID {list_id} not found", {"listId": list_id})
    logger.info("List %s updated successfully", list_id)
    return updated


def delete_list(store: RecordStore, list_id: str, user_id: str) -> bool:
    """Delete a list together with its cards."""
    logger.info("Deleting list %s by user %s", list_id, user_id)
    with logged_failure(logger, f"delete list {list_id}"):
        board_list = load_list(store, list_id)
        require_owned_board(store, board_list.board_id, user_id)
        remove_member(store, BOARD_LISTS, board_list.board_id, list_id)
        for card in store.find(CARDS, "list_id", list_id):
            store.delete(CARDS, card.id)
        store.delete(LISTS, list_id)
    logger.info("List %s deleted successfully", list_id)
    return True


def reorder_list(store: RecordStore, list_id: str, new_index: int, user_id: str) -> Board:
    """Move a list to ``new_index`` within its board's ``list_order``.

    Reads and rewrites the whole array; a concurrent reorder of the same
    board may be lost.
    """
    logger.info("Reordering list %s to index %s by user %s", list_id, new_index, user_id)
    with logged_failure(logger, f"reorder list {list_id}"):
        board_list = load_list(store, list_id)
        board = require_owned_board(store, board_list.board_id, user_id)
        if list_id not in board.list_order:
            raise InvalidArgument(
                f"List {list_id} does not belong to board {board.id}",
                {"listId": list_id, "boardId": board.id},
            )
        check_index(new_index, len(board.list_order) - 1)
        order = moved(board.list_order, list_id, new_index, BOARD_LISTS)
        updated = write_order(store, BOARD_LISTS, board.id, order)
        if updated is None:
            raise NotFound(f"Board with ID {board.id} not found", {"boardId": board.id})
    logger.info("List %s reordered successfully", list_id)
    return updated
