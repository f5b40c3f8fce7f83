from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from . import boards, cards, lists, queries
from .auth import get_current_user
from .config import Settings, configure_logging
from .errors import Forbidden, InvalidArgument, NotFound, PlanboardError, StoreFailure
from .schemas import (
    BoardIn,
    BoardOut,
    BoardsPage,
    CardIn,
    CardMove,
    CardOut,
    CardPatch,
    ErrorEnvelope,
    Health,
    ListIn,
    ListMove,
    ListOut,
    ListPatch,
)
from .store import MemoryStore, RecordStore

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFound: 404,
    Forbidden: 403,
    InvalidArgument: 400,
    StoreFailure: 503,
}


def build_store(settings: Settings) -> RecordStore:
    if settings.store_backend == "sql":
        from .db import SqlStore

        store = SqlStore(settings.database_url)
        store.init_db()
        return store
    return MemoryStore()


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


def create_app(store: Optional[RecordStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Planboard API", version="1.0.0")
    app.state.store = store if store is not None else build_store(settings)
    logger.info("Planboard API using %s store", type(app.state.store).__name__)

    @app.exception_handler(PlanboardError)
    async def handle_planboard_error(request: Request, exc: PlanboardError) -> JSONResponse:
        status = STATUS_BY_ERROR.get(type(exc), 500)
        body = ErrorEnvelope(code=exc.code, message=exc.message, details=exc.details or None)
        return JSONResponse(status_code=status, content=body.model_dump())

    # === Health ===

    @app.get("/v1/health", response_model=Health)
    def health() -> Health:
        return Health()

    # === Board endpoints ===

    @app.post("/v1/boards", response_model=BoardOut, status_code=201)
    def create_board(payload: BoardIn, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        return BoardOut.from_record(boards.create_board(store, payload.title, user))

    @app.get("/v1/boards", response_model=BoardsPage)
    def list_boards(user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        return BoardsPage(boards=[BoardOut.from_record(b) for b in boards.boards_for_user(store, user)])

    @app.get("/v1/boards/{board_id}", response_model=BoardOut)
    def get_board(board_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        return BoardOut.from_record(boards.get_board(store, board_id, user))

    @app.delete("/v1/boards/{board_id}", status_code=204)
    def delete_board(board_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        boards.delete_board(store, board_id, user)
        return Response(status_code=204)

    # === List endpoints ===

    @app.get("/v1/boards/{board_id}/lists", response_model=list[ListOut])
    def board_lists(board_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        return [ListOut.from_record(bl) for bl in queries.lists_for_board(store, board_id, user)]

    @app.post("/v1/boards/{board_id}/lists", response_model=ListOut, status_code=201)
    def create_list(
        board_id: str,
        payload: ListIn,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        return ListOut.from_record(lists.create_list(store, board_id, payload.title, user))

    @app.patch("/v1/lists/{list_id}", response_model=ListOut)
    def update_list(
        list_id: str,
        payload: ListPatch,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        return ListOut.from_record(lists.update_list(store, list_id, payload.title, user))

    @app.delete("/v1/lists/{list_id}", status_code=204)
    def delete_list(list_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        lists.delete_list(store, list_id, user)
        return Response(status_code=204)

    @app.post("/v1/lists/{list_id}:move", response_model=BoardOut)
    def move_list(
        list_id: str,
        payload: ListMove,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        return BoardOut.from_record(lists.reorder_list(store, list_id, payload.newIndex, user))

    # === Card endpoints ===

    @app.get("/v1/lists/{list_id}/cards", response_model=list[CardOut])
    def list_cards(list_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        return [CardOut.from_record(c) for c in queries.cards_for_list(store, list_id, user)]

    @app.post("/v1/lists/{list_id}/cards", response_model=CardOut, status_code=201)
    def create_card(
        list_id: str,
        payload: CardIn,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        return CardOut.from_record(cards.create_card(store, list_id, payload.content, user))

    @app.patch("/v1/cards/{card_id}", response_model=CardOut)
    def update_card(
        card_id: str,
        payload: CardPatch,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        return CardOut.from_record(cards.update_card(store, card_id, payload.content, user))

    @app.delete("/v1/cards/{card_id}", status_code=204)
    def delete_card(card_id: str, user: str = Depends(get_current_user), store: RecordStore = Depends(get_store)):
        cards.delete_card(store, card_id, user)
        return Response(status_code=204)

    @app.post("/v1/cards/{card_id}:move", response_model=BoardOut)
    def move_card(
        card_id: str,
        payload: CardMove,
        user: str = Depends(get_current_user),
        store: RecordStore = Depends(get_store),
    ):
        board = cards.reorder_card(store, card_id, payload.sourceListId, payload.destListId, payload.newIndex, user)
        return BoardOut.from_record(board)

    return app


def run() -> None:
    import os

    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(settings=settings),
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )


if __name__ == "__main__":
    run()
