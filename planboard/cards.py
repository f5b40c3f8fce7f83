"""Card operations and each list's ``card_order``."""

from __future__ import annotations

import logging
from typing import Optional

from .config import CONTENT_MAX_LENGTH
from .errors import InvalidArgument, NotFound
from .guard import load_card, load_list, require_owned_board
from .models import Board, Card
from .ordering import LIST_CARDS, append_member, check_index, inserted, remove_member, without, write_order
from .store import CARDS, RecordStore
from .utils import clean_text, logged_failure, new_uuid, now_utc, preview

logger = logging.getLogger(__name__)


def create_card(store: RecordStore, list_id: str, content: str, user_id: str) -> Card:
    logger.info("Creating card for list %s by user %s", list_id, user_id)
    with logged_failure(logger, f"create card on list {list_id}"):
        board_list = load_list(store, list_id)
        require_owned_board(store, board_list.board_id, user_id)
        now = now_utc()
        card = Card(
            id=new_uuid(),
            content=clean_text(content, "content", CONTENT_MAX_LENGTH),
            list_id=list_id,
            created_at=now,
            updated_at=now,
        )
        store.insert(CARDS, card)
        if append_member(store, LIST_CARDS, list_id, card.id) is None:
            logger.warning("List %s vanished before card %s was appended", list_id, card.id)
    logger.info("Card created successfully: %s (%s)", card.id, preview(card.content))
    return card


def update_card(store: RecordStore, card_id: str, content: Optional[str], user_id: str) -> Card:
    logger.info("Updating card %s by user %s", card_id, user_id)
    with logged_failure(logger, f"update card {card_id}"):
        card = load_card(store, card_id)
        board_list = load_list(store, card.list_id)
        require_owned_board(store, board_list.board_id, user_id)
        changes = {}
        if content is not None:
            changes["content"] = clean_text(content, "content", CONTENT_MAX_LENGTH)
        updated = store.set_fields(CARDS, card_id, **changes)
        if updated is None:
            raise NotFound(f"Card with ID {card_id} not found", {"cardId": card_id})
    logger.info("Card %s updated successfully", card_id)
    return updated


def delete_card(store: RecordStore, card_id: str, user_id: str) -> bool:
    logger.info("Deleting card %s by user %s", card_id, user_id)
    with logged_failure(logger, f"delete card {card_id}"):
        card = load_card(store, card_id)
        board_list = load_list(store, card.list_id)
        require_owned_board(store, board_list.board_id, user_id)
        remove_member(store, LIST_CARDS, board_list.id, card_id)
        store.delete(CARDS, card_id)
    logger.info("Card %s deleted successfully", card_id)
    return True


def reorder_card(
    store: RecordStore,
    card_id: str,
    source_list_id: str,
    dest_list_id: str,
    new_index: int,
    user_id: str,
) -> Board:
    """Move a card within a list or to another list on the same board.

    Every check runs before the first write, so a rejected move changes
    nothing. ``new_index`` may equal the destination length (append).
    """
    logger.info(
        "Reordering card %s from list %s to list %s at index %s by user %s",
        card_id,
        source_list_id,
        dest_list_id,
        new_index,
        user_id,
    )
    with logged_failure(logger, f"reorder card {card_id}"):
        card = load_card(store, card_id)
        if card.list_id != source_list_id:
            raise InvalidArgument(
                f"Card {card_id} does not belong to source list {source_list_id}",
                {"cardId": card_id, "sourceListId": source_list_id},
            )
        source = load_list(store, source_list_id, "Source list")
        dest = load_list(store, dest_list_id, "Destination list")
        if source.board_id != dest.board_id:
            raise InvalidArgument(
                "Source and destination lists must belong to the same board",
                {"sourceListId": source_list_id, "destListId": dest_list_id},
            )
        board = require_owned_board(store, source.board_id, user_id)
        check_index(new_index, len(dest.card_order))

        same_list = source_list_id == dest_list_id
        source_order = without(source.card_order, card_id, LIST_CARDS)
        dest_order = inserted(source_order if same_list else dest.card_order, card_id, new_index)

        if not same_list:
            store.set_fields(CARDS, card_id, list_id=dest_list_id)
            write_order(store, LIST_CARDS, source_list_id, source_order)
        write_order(store, LIST_CARDS, dest_list_id, dest_order)
    logger.info("Card %s reordered successfully", card_id)
    return board
