import os

os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("PUBLIC_BASE_URL", "https://rsvp.example.com")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from rsvp_app.core.limiter import limiter
from rsvp_app.db import build_engine, init_db
from rsvp_app.main import create_application
from rsvp_app.models import User
from rsvp_app.schemas import EventCreate
from rsvp_app.services.events import create_event
from rsvp_app.store import MemoryEventStore, SqlEventStore

from factories import bearer


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        yield MemoryEventStore()
        return
    engine = build_engine("sqlite://")
    init_db(engine)
    yield SqlEventStore(engine)
    engine.dispose()


@pytest.fixture
def client(store):
    app = create_application(store=store)
    with TestClient(app) as test_client:
        yield test_client


def _put_user(store, user_id, email, name):
    with store.atomic():
        return store.put_user(User(id=user_id, email=email, name=name))


@pytest.fixture
def owner(store):
    return _put_user(store, "owner-1", "hana@example.com", "Hana Host")


@pytest.fixture
def stranger(store):
    return _put_user(store, "stranger-1", "sam@example.com", "Sam Stranger")


@pytest.fixture
def owner_headers(owner):
    return bearer(owner)


@pytest.fixture
def stranger_headers(stranger):
    return bearer(stranger)


@pytest.fixture
def event(store, owner):
    payload = EventCreate(
        name="Summer Garden Party",
        date=datetime(2026, 7, 4, 18, 0),
        end_date=datetime(2026, 7, 4, 23, 0),
        location="12 Orchard Lane",
        description="Bring a dish to share",
        dress_code="Garden casual",
    )
    return create_event(store, owner, payload)
