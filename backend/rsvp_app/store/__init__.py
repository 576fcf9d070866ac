from .base import EventStore
from .memory import MemoryEventStore
from .sql import SqlEventStore

__all__ = [
    "EventStore",
    "MemoryEventStore",
    "SqlEventStore",
]
