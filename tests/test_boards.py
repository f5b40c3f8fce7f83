import pytest

from planboard.boards import boards_for_user, create_board, delete_board, get_board
from planboard.cards import create_card
from planboard.errors import Forbidden, InvalidArgument, NotFound
from planboard.guard import require_owned_board
from planboard.lists import create_list
from planboard.store import BOARDS, CARDS, LISTS

from .helpers import OWNER, STRANGER


def test_create_board(store):
    board = create_board(store, "  Roadmap ", OWNER)
    assert board.title == "Roadmap"
    assert board.owner_id == OWNER
    assert board.list_order == []
    assert store.get(BOARDS, board.id) == board


def test_create_board_rejects_empty_title(store):
    with pytest.raises(InvalidArgument):
        create_board(store, " ", OWNER)


def test_boards_for_user_newest_first(store):
    first = create_board(store, "First", OWNER)
    second = create_board(store, "Second", OWNER)
    create_board(store, "Theirs", STRANGER)
    assert [b.id for b in boards_for_user(store, OWNER)] == [second.id, first.id]


def test_guard(store, board):
    assert require_owned_board(store, board.id, OWNER).id == board.id
    assert get_board(store, board.id, OWNER).id == board.id
    with pytest.raises(Forbidden):
        require_owned_board(store, board.id, STRANGER)
    with pytest.raises(NotFound):
        require_owned_board(store, "missing", OWNER)


def test_delete_board_cascades(store, board):
    board_list = create_list(store, board.id, "L1", OWNER)
    card = create_card(store, board_list.id, "one", OWNER)
    assert delete_board(store, board.id, OWNER) is True
    assert store.get(BOARDS, board.id) is None
    assert store.get(LISTS, board_list.id) is None
    assert store.get(CARDS, card.id) is None


def test_delete_board_forbidden(store, board):
    with pytest.raises(Forbidden):
        delete_board(store, board.id, STRANGER)
    assert store.get(BOARDS, board.id) is not None
