from __future__ import annotations

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from rsvp_app.core.config import Settings, settings
from rsvp_app.store import EventStore, MemoryEventStore, SqlEventStore

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    connect_args = {}
    kwargs = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if ":memory:" in database_url or database_url == "sqlite://":
            # One shared connection, otherwise every checkout sees an empty db
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, connect_args=connect_args, **kwargs)


def init_db(engine: Engine) -> None:
    """Create database tables in environments without migrations."""
    SQLModel.metadata.create_all(bind=engine)


def build_store(config: Settings = settings) -> EventStore:
    if config.STORE_BACKEND == "memory":
        logger.warning("Using in-memory store; data is lost on restart")
        return MemoryEventStore()

    engine = build_engine(config.DATABASE_URL)
    init_db(engine)
    return SqlEventStore(engine)
