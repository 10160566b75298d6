from __future__ import annotations

from typing import Any

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    create_engine,
    event,
    func,
    select,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import (
    Session,
    declarative_base,
    relationship,
    scoped_session,
    sessionmaker,
)

from hopeclub.config import settings

Base = declarative_base()


def _configure_sqlite(engine: Engine) -> None:
    """SQLite ignores ``FOR UPDATE``; take the write lock at BEGIN instead.

    Every transaction starts with ``BEGIN IMMEDIATE`` so two writers can never
    both read a row and then both act on the stale value.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to the "begin" hook below.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    Model = Base
    Column = Column
    Integer = Integer
    String = String
    Text = Text
    Boolean = Boolean
    Date = Date
    DateTime = DateTime
    Uuid = Uuid
    JSON = JSON
    ForeignKey = ForeignKey
    Table = Table
    UniqueConstraint = UniqueConstraint
    CheckConstraint = CheckConstraint
    Index = Index
    relationship = staticmethod(relationship)
    func = func
    select = staticmethod(select)

    def __init__(self, database_url: str, *, echo: bool = False, busy_timeout: float = 15.0):
        self.url = make_url(database_url)
        connect_args: dict[str, Any] = {}
        if self.is_sqlite:
            connect_args = {"check_same_thread": False, "timeout": busy_timeout}
        self.engine = create_engine(database_url, echo=echo, future=True, connect_args=connect_args)
        if self.is_sqlite:
            _configure_sqlite(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)
        self.session = scoped_session(self.SessionLocal)

    @property
    def is_sqlite(self) -> bool:
        return self.url.drivername.startswith("sqlite")

    def new_session(self) -> Session:
        """Return an unscoped session, e.g. for work on another thread."""
        return self.SessionLocal()

    def remove_session(self) -> None:
        self.session.remove()

    def create_all(self) -> None:
        Base.metadata.create_all(self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(self.engine)

    def dispose(self) -> None:
        self.session.remove()
        self.engine.dispose()

    def __getattr__(self, item: str) -> Any:
        return getattr(Base, item)


db = Database(settings.DATABASE_URL, echo=settings.SQL_ECHO, busy_timeout=settings.SQLITE_BUSY_TIMEOUT)
