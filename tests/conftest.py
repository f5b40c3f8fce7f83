import pytest

from planboard.boards import create_board

from .helpers import OWNER, RecordingStore


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def board(store):
    return create_board(store, "Roadmap", OWNER)
