"""SQLModel-backed store."""

from __future__ import annotations

import logging
import threading
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import case, delete, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import Session, select

from rsvp_app.core.errors import ConflictError, NotFoundError, StoreError
from rsvp_app.models import Event, Guest, User

from .base import EventStore

logger = logging.getLogger(__name__)

# Fields an update never overwrites
_EVENT_IMMUTABLE = {"id", "guest_count", "created_at"}
_ROW_IMMUTABLE = {"id", "created_at"}


class SqlEventStore(EventStore):
    """Store backed by a SQLAlchemy engine.

    Each ``atomic`` block owns one session and one transaction. Calls made
    outside a block get their own short transaction.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._local = threading.local()

    @contextmanager
    def atomic(self) -> Generator[None, None, None]:
        if getattr(self._local, "session", None) is not None:
            yield
            return

        session = Session(self.engine, expire_on_commit=False)
        self._local.session = session
        try:
            yield
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.warning(f"Store transaction hit a constraint: {exc.orig}")
            raise ConflictError(str(exc)) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Store transaction failed")
            raise StoreError(str(exc)) from exc
        except Exception:
            session.rollback()
            raise
        finally:
            self._local.session = None
            session.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        with self.atomic():
            yield self._local.session

    # Events

    def get_event(self, event_id: str) -> Optional[Event]:
        with self._session() as session:
            return session.get(Event, event_id)

    def list_events_by_owner(self, user_id: str) -> List[Event]:
        with self._session() as session:
            statement = (
                select(Event).where(Event.user_id == user_id).order_by(Event.date)
            )
            return list(session.exec(statement).all())

    def put_event(self, event: Event) -> Event:
        with self._session() as session:
            existing = session.get(Event, event.id)
            if existing is None:
                session.add(event)
                session.flush()
                return event
            if existing is not event:
                for field, value in event.model_dump(exclude=_EVENT_IMMUTABLE).items():
                    setattr(existing, field, value)
            session.flush()
            return existing

    def delete_event(self, event_id: str) -> int:
        with self._session() as session:
            result = session.execute(delete(Guest).where(Guest.event_id == event_id))
            session.execute(delete(Event).where(Event.id == event_id))
            return result.rowcount or 0

    def adjust_guest_count(self, event_id: str, delta: int) -> int:
        with self._session() as session:
            adjusted = Event.guest_count + delta
            session.execute(
                update(Event)
                .where(Event.id == event_id)
                .values(guest_count=case((adjusted < 0, 0), else_=adjusted))
                .execution_options(synchronize_session=False)
            )
            count = session.exec(
                select(Event.guest_count).where(Event.id == event_id)
            ).first()
            if count is None:
                raise NotFoundError("Event not found")
            # Keep an already loaded instance in step with the row
            loaded = session.get(Event, event_id)
            if loaded is not None:
                set_committed_value(loaded, "guest_count", count)
            return count

    # Guests

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        with self._session() as session:
            return session.get(Guest, guest_id)

    def find_guest(
        self, event_id: str, email: str, *, for_update: bool = False
    ) -> Optional[Guest]:
        with self._session() as session:
            statement = select(Guest).where(
                Guest.event_id == event_id, Guest.email == email
            )
            if for_update:
                statement = statement.with_for_update()
            return session.exec(statement).first()

    def list_guests_by_event(self, event_id: str) -> List[Guest]:
        with self._session() as session:
            statement = (
                select(Guest)
                .where(Guest.event_id == event_id)
                .order_by(Guest.created_at)
            )
            return list(session.exec(statement).all())

    def put_guest(self, guest: Guest) -> Guest:
        with self._session() as session:
            return self._upsert(session, Guest, guest)

    def delete_guest(self, guest_id: str) -> bool:
        with self._session() as session:
            result = session.execute(delete(Guest).where(Guest.id == guest_id))
            return bool(result.rowcount)

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(
                select(User).where(User.email == email.lower())
            ).first()

    def put_user(self, user: User) -> User:
        with self._session() as session:
            return self._upsert(session, User, user)

    def ping(self) -> None:
        with self._session() as session:
            session.execute(text("SELECT 1"))

    @staticmethod
    def _upsert(session: Session, model, obj):
        existing = session.get(model, obj.id)
        if existing is None:
            session.add(obj)
            session.flush()
            return obj
        if existing is not obj:
            for field, value in obj.model_dump(exclude=_ROW_IMMUTABLE).items():
                setattr(existing, field, value)
        session.flush()
        return existing
