from __future__ import annotations

import dataclasses
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Type

from sqlalchemy import JSON, DateTime, String, Text, create_engine, event, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from .errors import StoreFailure
from .models import Record
from .store import BOARDS, CARDS, LISTS, RECORD_TYPES, RecordStore
from .utils import now_utc


class Base(DeclarativeBase):
    pass


class BoardRow(Base):
    __tablename__ = "boards"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    owner_id: Mapped[str] = mapped_column(String(128), index=True)
    list_order: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)


class ListRow(Base):
    __tablename__ = "lists"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    # no foreign keys: parents and children are written independently
    board_id: Mapped[str] = mapped_column(String(36), index=True)
    card_order: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)


class CardRow(Base):
    __tablename__ = "cards"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    content: Mapped[str] = mapped_column(Text)
    list_id: Mapped[str] = mapped_column(String(36), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=now_utc)


ROW_TYPES: Dict[str, Type[Base]] = {
    BOARDS: BoardRow,
    LISTS: ListRow,
    CARDS: CardRow,
}


def _begin_immediate(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write; take over transaction control
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class SqlStore(RecordStore):
    """Record store backed by a SQLAlchemy engine.

    Each call runs in its own transaction. Array appends and removals lock
    the row (``SELECT ... FOR UPDATE``) before reading it. SQLite ignores
    ``FOR UPDATE``, so there every transaction starts with ``BEGIN IMMEDIATE``
    and takes the database write lock before its first read.
    """

    def __init__(self, database_url: str) -> None:
        is_sqlite = database_url.startswith("sqlite")
        self.engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": 30} if is_sqlite else {},
        )
        if is_sqlite:
            _begin_immediate(self.engine)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    def init_db(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as exc:
            raise StoreFailure(f"schema creation failed: {exc}") from exc

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        try:
            with self.session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            raise StoreFailure(f"{action} failed: {exc}") from exc

    @staticmethod
    def _row_type(collection: str) -> Type[Any]:
        try:
            return ROW_TYPES[collection]
        except KeyError:
            raise ValueError(f"unknown collection {collection!r}") from None

    @staticmethod
    def _to_record(collection: str, row: Any) -> Record:
        record_type = RECORD_TYPES[collection]
        values = {f.name: getattr(row, f.name) for f in dataclasses.fields(record_type)}
        for name, value in values.items():
            if isinstance(value, list):
                values[name] = list(value)
        return record_type(**values)

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        row_type = self._row_type(collection)
        with self._transaction(f"get {collection}/{record_id}") as session:
            row = session.get(row_type, record_id)
            return self._to_record(collection, row) if row is not None else None

    def find(self, collection: str, field: str, value: Any) -> List[Record]:
        row_type = self._row_type(collection)
        stmt = (
            select(row_type)
            .where(getattr(row_type, field) == value)
            .order_by(row_type.created_at)
        )
        with self._transaction(f"find {collection}") as session:
            return [self._to_record(collection, row) for row in session.scalars(stmt)]

    def insert(self, collection: str, record: Record) -> Record:
        row_type = self._row_type(collection)
        with self._transaction(f"insert {collection}/{record.id}") as session:
            session.add(row_type(**dataclasses.asdict(record)))
        return record

    def delete(self, collection: str, record_id: str) -> bool:
        row_type = self._row_type(collection)
        with self._transaction(f"delete {collection}/{record_id}") as session:
            row = session.get(row_type, record_id)
            if row is None:
                return False
            session.delete(row)
            return True

    def _locked_update(self, collection: str, record_id: str, action: str, change) -> Optional[Record]:
        row_type = self._row_type(collection)
        with self._transaction(f"{action} {collection}/{record_id}") as session:
            row = session.get(row_type, record_id, with_for_update=True)
            if row is None:
                return None
            change(row)
            row.updated_at = now_utc()
            session.flush()
            return self._to_record(collection, row)

    def set_fields(self, collection: str, record_id: str, **values: Any) -> Optional[Record]:
        def change(row: Any) -> None:
            for name, value in values.items():
                if not hasattr(row, name):
                    raise ValueError(f"unknown field {name!r} on {collection}")
                setattr(row, name, list(value) if isinstance(value, list) else value)

        return self._locked_update(collection, record_id, "set", change)

    def push(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        def change(row: Any) -> None:
            # reassign so the JSON column is flagged dirty
            setattr(row, field, list(getattr(row, field) or []) + [value])

        return self._locked_update(collection, record_id, "push", change)

    def pull(self, collection: str, record_id: str, field: str, value: Any) -> Optional[Record]:
        def change(row: Any) -> None:
            setattr(row, field, [v for v in (getattr(row, field) or []) if v != value])

        return self._locked_update(collection, record_id, "pull", change)
