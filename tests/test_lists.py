import logging

import pytest

from planboard.boards import create_board
from planboard.cards import create_card
from planboard.errors import Forbidden, InvalidArgument, NotFound, StoreFailure
from planboard.lists import create_list, delete_list, reorder_list, update_list
from planboard.queries import lists_for_board
from planboard.store import BOARDS, CARDS, LISTS

from .helpers import OWNER, STRANGER, FailingPushStore


def _list_order(store, board):
    return store.get(BOARDS, board.id).list_order


def test_create_list_appends_to_list_order(store, board):
    first = create_list(store, board.id, "Todo", OWNER)
    second = create_list(store, board.id, "  Done  ", OWNER)
    assert second.title == "Done"
    assert second.board_id == board.id
    assert second.card_order == []
    assert _list_order(store, board) == [first.id, second.id]


@pytest.mark.parametrize("title", ["", "   ", "x" * 101, None])
def test_create_list_rejects_bad_title(store, board, title):
    with pytest.raises(InvalidArgument):
        create_list(store, board.id, title, OWNER)
    assert _list_order(store, board) == []


def test_create_list_accepts_max_title(store, board):
    assert len(create_list(store, board.id, "x" * 100, OWNER).title) == 100


def test_create_list_unknown_board(store):
    with pytest.raises(NotFound):
        create_list(store, "missing", "Todo", OWNER)


def test_create_list_on_foreign_board(store, board):
    with pytest.raises(Forbidden):
        create_list(store, board.id, "Todo", STRANGER)
    assert store.find(LISTS, "board_id", board.id) == []


def test_create_list_append_failure_leaves_discoverable_list():
    store = FailingPushStore()
    board = create_board(store, "Roadmap", OWNER)
    store.fail_push = True
    with pytest.raises(StoreFailure):
        create_list(store, board.id, "Todo", OWNER)
    assert store.get(BOARDS, board.id).list_order == []
    assert [bl.title for bl in lists_for_board(store, board.id, OWNER)] == ["Todo"]


def test_update_list_title(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    updated = update_list(store, board_list.id, " Doing ", OWNER)
    assert updated.title == "Doing"
    assert store.get(LISTS, board_list.id).title == "Doing"


def test_update_list_without_title_keeps_it(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    assert update_list(store, board_list.id, None, OWNER).title == "Todo"


def test_update_list_rejects_bad_title(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    with pytest.raises(InvalidArgument):
        update_list(store, board_list.id, "  ", OWNER)
    assert store.get(LISTS, board_list.id).title == "Todo"


def test_update_list_errors(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    with pytest.raises(NotFound):
        update_list(store, "missing", "x", OWNER)
    with pytest.raises(Forbidden):
        update_list(store, board_list.id, "x", STRANGER)


def test_delete_list_removes_from_order(store, board):
    first = create_list(store, board.id, "Todo", OWNER)
    second = create_list(store, board.id, "Done", OWNER)
    assert delete_list(store, first.id, OWNER) is True
    assert _list_order(store, board) == [second.id]
    assert store.get(LISTS, first.id) is None


def test_delete_list_cascades_to_cards(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    card = create_card(store, board_list.id, "Write docs", OWNER)
    delete_list(store, board_list.id, OWNER)
    assert store.get(CARDS, card.id) is None


def test_delete_list_forbidden_leaves_everything(store, board):
    board_list = create_list(store, board.id, "Todo", OWNER)
    with pytest.raises(Forbidden):
        delete_list(store, board_list.id, STRANGER)
    assert store.get(LISTS, board_list.id) is not None
    assert _list_order(store, board) == [board_list.id]


def test_delete_list_missing(store):
    with pytest.raises(NotFound):
        delete_list(store, "missing", OWNER)


def test_reorder_list_to_front(store, board):
    l1 = create_list(store, board.id, "L1", OWNER)
    l2 = create_list(store, board.id, "L2", OWNER)
    result = reorder_list(store, l2.id, 0, OWNER)
    assert result.list_order == [l2.id, l1.id]
    assert _list_order(store, board) == [l2.id, l1.id]


def test_reorder_list_by_stranger_is_forbidden(store, board):
    l1 = create_list(store, board.id, "L1", OWNER)
    l2 = create_list(store, board.id, "L2", OWNER)
    with pytest.raises(Forbidden):
        reorder_list(store, l1.id, 0, STRANGER)
    assert _list_order(store, board) == [l1.id, l2.id]


def test_reorder_list_same_index_is_idempotent(store, board):
    ids = [create_list(store, board.id, f"L{i}", OWNER).id for i in range(3)]
    once = reorder_list(store, ids[1], 1, OWNER).list_order
    twice = reorder_list(store, ids[1], 1, OWNER).list_order
    assert once == twice == ids


def test_reorder_list_upper_bound(store, board):
    ids = [create_list(store, board.id, f"L{i}", OWNER).id for i in range(3)]
    with pytest.raises(InvalidArgument):
        reorder_list(store, ids[0], 3, OWNER)
    assert _list_order(store, board) == ids
    assert reorder_list(store, ids[0], 2, OWNER).list_order == [ids[1], ids[2], ids[0]]


def test_reorder_list_negative_index(store, board):
    board_list = create_list(store, board.id, "L1", OWNER)
    with pytest.raises(InvalidArgument):
        reorder_list(store, board_list.id, -1, OWNER)


def test_reorder_list_not_in_list_order(store, board):
    board_list = create_list(store, board.id, "L1", OWNER)
    store.pull(BOARDS, board.id, "list_order", board_list.id)
    with pytest.raises(InvalidArgument):
        reorder_list(store, board_list.id, 0, OWNER)


def test_list_order_matches_live_lists_after_mixed_operations(store, board):
    ids = [create_list(store, board.id, f"L{i}", OWNER).id for i in range(4)]
    reorder_list(store, ids[3], 0, OWNER)
    delete_list(store, ids[1], OWNER)
    extra = create_list(store, board.id, "L4", OWNER).id
    reorder_list(store, extra, 1, OWNER)

    order = _list_order(store, board)
    live = {bl.id for bl in store.find(LISTS, "board_id", board.id)}
    assert len(order) == len(set(order))
    assert set(order) == live
    assert order == [ids[3], extra, ids[0], ids[2]]


def test_forbidden_create_list_is_logged_once(store, board, caplog):
    caplog.set_level(logging.DEBUG, logger="planboard")
    with pytest.raises(Forbidden):
        create_list(store, board.id, "Todo", STRANGER)
    denials = [r for r in caplog.records if "permission" in r.getMessage()]
    assert len(denials) == 1
    assert denials[0].levelno == logging.WARNING
    assert denials[0].name == "planboard.lists"
