from __future__ import annotations

import logging
from typing import List

from .guard import load_list, require_owned_board
from .models import BoardList, Card
from .ordering import arrange
from .store import CARDS, LISTS, RecordStore
from .utils import logged_failure

logger = logging.getLogger(__name__)


def lists_for_board(store: RecordStore, board_id: str, user_id: str) -> List[BoardList]:
    """Lists of a board in ``list_order``; unlisted lists follow, oldest first."""
    with logged_failure(logger, f"fetch lists for board {board_id}"):
        board = require_owned_board(store, board_id, user_id)
        lists = arrange(store.find(LISTS, "board_id", board_id), board.list_order)
    if len(lists) != len(board.list_order):
        logger.debug("Board %s list_order drifted: %d ids, %d lists", board_id, len(board.list_order), len(lists))
    return lists


def cards_for_list(store: RecordStore, list_id: str, user_id: str) -> List[Card]:
    """Cards of a list in ``card_order``; unlisted cards follow, oldest first."""
    with logged_failure(logger, f"fetch cards for list {list_id}"):
        board_list = load_list(store, list_id)
        require_owned_board(store, board_list.board_id, user_id)
        cards = arrange(store.find(CARDS, "list_id", list_id), board_list.card_order)
    if len(cards) != len(board_list.card_order):
        logger.debug("List %s card_order drifted: %d ids, %d cards", list_id, len(board_list.card_order), len(cards))
    return cards
