"""In-process store for tests and local runs without a database."""

from __future__ import annotations

import copy
import threading
from collections.abc import Generator
from contextlib import contextmanager
from typing import Dict, List, Optional, Tuple, TypeVar

from sqlmodel import SQLModel

from rsvp_app.core.errors import NotFoundError
from rsvp_app.models import Event, Guest, User

from .base import EventStore


T = TypeVar("T", bound=SQLModel)


def _clone(obj: T) -> T:
    # Callers never share instances with the store
    return type(obj)(**copy.deepcopy(obj.model_dump()))


class MemoryEventStore(EventStore):
    """Dict-backed store.

    A single re-entrant lock serializes every call. The first write inside
    an ``atomic`` block takes a snapshot of the tables so a failing block
    leaves nothing behind; read-only blocks copy nothing. Stored rows are
    replaced, never mutated, which keeps the snapshot shallow.
    """

    def __init__(self) -> None:
        self._events: Dict[str, Event] = {}
        self._guests: Dict[str, Guest] = {}
        self._users: Dict[str, User] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._snapshot: Optional[Tuple[dict, dict, dict]] = None

    @contextmanager
    def atomic(self) -> Generator[None, None, None]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            self._depth = 1
            self._snapshot = None
            try:
                yield
            except BaseException:
                if self._snapshot is not None:
                    self._events, self._guests, self._users = self._snapshot
                raise
            finally:
                self._depth = 0
                self._snapshot = None

    def _before_write(self) -> None:
        if self._snapshot is None:
            self._snapshot = (dict(self._events), dict(self._guests), dict(self._users))

    # Events

    def get_event(self, event_id: str) -> Optional[Event]:
        with self.atomic():
            event = self._events.get(event_id)
            return _clone(event) if event else None

    def list_events_by_owner(self, user_id: str) -> List[Event]:
        with self.atomic():
            events = [e for e in self._events.values() if e.user_id == user_id]
            return [_clone(e) for e in sorted(events, key=lambda e: e.date)]

    def put_event(self, event: Event) -> Event:
        with self.atomic():
            self._before_write()
            stored = _clone(event)
            existing = self._events.get(event.id)
            if existing is not None:
                stored.guest_count = existing.guest_count
                stored.created_at = existing.created_at
            self._events[stored.id] = stored
            return _clone(stored)

    def delete_event(self, event_id: str) -> int:
        with self.atomic():
            self._before_write()
            doomed = [g.id for g in self._guests.values() if g.event_id == event_id]
            for guest_id in doomed:
                del self._guests[guest_id]
            self._events.pop(event_id, None)
            return len(doomed)

    def adjust_guest_count(self, event_id: str, delta: int) -> int:
        with self.atomic():
            self._before_write()
            existing = self._events.get(event_id)
            if existing is None:
                raise NotFoundError("Event not found")
            stored = _clone(existing)
            stored.guest_count = max(0, stored.guest_count + delta)
            self._events[event_id] = stored
            return stored.guest_count

    # Guests

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        with self.atomic():
            guest = self._guests.get(guest_id)
            return _clone(guest) if guest else None

    def find_guest(
        self, event_id: str, email: str, *, for_update: bool = False
    ) -> Optional[Guest]:
        # for_update needs nothing extra: atomic() already holds the lock
        with self.atomic():
            for guest in self._guests.values():
                if guest.event_id == event_id and guest.email == email:
                    return _clone(guest)
            return None

    def list_guests_by_event(self, event_id: str) -> List[Guest]:
        with self.atomic():
            guests = [g for g in self._guests.values() if g.event_id == event_id]
            return [_clone(g) for g in sorted(guests, key=lambda g: g.created_at)]

    def put_guest(self, guest: Guest) -> Guest:
        with self.atomic():
            self._before_write()
            stored = _clone(guest)
            existing = self._guests.get(guest.id)
            if existing is not None:
                stored.created_at = existing.created_at
            self._guests[stored.id] = stored
            return _clone(stored)

    def delete_guest(self, guest_id: str) -> bool:
        with self.atomic():
            self._before_write()
            return self._guests.pop(guest_id, None) is not None

    # Users

    def get_user(self, user_id: str) -> Optional[User]:
        with self.atomic():
            user = self._users.get(user_id)
            return _clone(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self.atomic():
            email = email.lower()
            for user in self._users.values():
                if user.email == email:
                    return _clone(user)
            return None

    def put_user(self, user: User) -> User:
        with self.atomic():
            self._before_write()
            stored = _clone(user)
            existing = self._users.get(user.id)
            if existing is not None:
                stored.created_at = existing.created_at
            self._users[stored.id] = stored
            return _clone(stored)

    def ping(self) -> None:
        return None
