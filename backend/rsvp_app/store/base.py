"""Store interface (repository pattern).

Business logic only talks to ``EventStore``; the concrete backend is picked
once when the application is built.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional

from rsvp_app.models import Event, Guest, User


class EventStore(ABC):
    """Persistence for events, their guests, and host accounts."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Group the calls made inside the block into one unit of work.

        Everything commits together on a clean exit and nothing is kept when
        the block raises. Nested blocks join the outer one. A unique
        constraint violated by a concurrent writer surfaces as
        ``ConflictError``.
        """

    # Events

    @abstractmethod
    def get_event(self, event_id: str) -> Optional[Event]:
        """Return an event by id, or None if not found."""

    @abstractmethod
    def list_events_by_owner(self, user_id: str) -> List[Event]:
        """Return the owner's events ordered by date ascending."""

    @abstractmethod
    def put_event(self, event: Event) -> Event:
        """Insert or overwrite an event.

        ``guest_count`` is only taken from ``event`` on insert. Updates keep
        the stored counter, which only ``adjust_guest_count`` may change.
        """

    @abstractmethod
    def delete_event(self, event_id: str) -> int:
        """Delete the event and every guest pointing at it in one step.

        Returns the number of guest records removed.
        """

    @abstractmethod
    def adjust_guest_count(self, event_id: str, delta: int) -> int:
        """Atomically add ``delta`` to the event's guest_count, flooring at 0.

        Returns the new value.
        """

    # Guests

    @abstractmethod
    def get_guest(self, guest_id: str) -> Optional[Guest]:
        """Return a guest by id, or None if not found."""

    @abstractmethod
    def find_guest(
        self, event_id: str, email: str, *, for_update: bool = False
    ) -> Optional[Guest]:
        """Return the RSVP for (event_id, email), or None.

        ``for_update`` locks the row until the surrounding ``atomic`` block
        ends, on backends that support row locks.
        """

    @abstractmethod
    def list_guests_by_event(self, event_id: str) -> List[Guest]:
        """Return the event's guests ordered by created_at ascending."""

    @abstractmethod
    def put_guest(self, guest: Guest) -> Guest:
        """Insert or overwrite a guest record."""

    @abstractmethod
    def delete_guest(self, guest_id: str) -> bool:
        """Delete a guest record. Returns False if it did not exist."""

    # Users

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        """Return a user by id, or None if not found."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Return a user by (lower-cased) email, or None if not found."""

    @abstractmethod
    def put_user(self, user: User) -> User:
        """Insert or overwrite a user."""

    # Health

    @abstractmethod
    def ping(self) -> None:
        """Raise ``StoreError`` if the backend cannot be reached."""
