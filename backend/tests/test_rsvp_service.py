import threading
from datetime import datetime

import pytest

from rsvp_app.core.errors import ConflictError, NotFoundError, ValidationError
from rsvp_app.db import build_engine, init_db
from rsvp_app.models import Guest, User
from rsvp_app.schemas import EventCreate
from rsvp_app.services.events import create_event, delete_event
from rsvp_app.services.rsvp import counter_delta, delete_guest, submit_rsvp
from rsvp_app.store import MemoryEventStore, SqlEventStore

from factories import make_rsvp


def assert_counter_consistent(store, event_id):
    guests = store.list_guests_by_event(event_id)
    expected = sum(g.number_of_guests for g in guests if g.response == "attending")
    event = store.get_event(event_id)
    assert event.guest_count == expected
    assert event.guest_count >= 0


def test_first_attending_rsvp_defaults_to_one_guest(store, event):
    guest = submit_rsvp(store, event.id, make_rsvp())

    assert guest.id
    assert guest.number_of_guests == 1
    assert store.get_event(event.id).guest_count == 1


def test_first_declined_rsvp_leaves_counter_alone(store, event):
    submit_rsvp(store, event.id, make_rsvp(response="declined"))

    assert store.get_event(event.id).guest_count == 0
    assert_counter_consistent(store, event.id)


def test_resubmitting_same_answer_is_idempotent(store, event):
    submission = make_rsvp(number_of_guests=2, additional_guest_names=["Charles Babbage"])
    first = submit_rsvp(store, event.id, submission)
    second = submit_rsvp(store, event.id, submission)

    guests = store.list_guests_by_event(event.id)
    assert len(guests) == 1
    assert second.id == first.id
    assert store.get_event(event.id).guest_count == 2


def test_transition_deltas(store, event):
    submit_rsvp(
        store,
        event.id,
        make_rsvp(
            number_of_guests=3,
            additional_guest_names=["Charles Babbage", "Mary Somerville"],
        ),
    )
    assert store.get_event(event.id).guest_count == 3

    submit_rsvp(store, event.id, make_rsvp(response="declined"))
    assert store.get_event(event.id).guest_count == 0

    submit_rsvp(
        store,
        event.id,
        make_rsvp(
            number_of_guests=5,
            additional_guest_names=[
                "Charles Babbage",
                "Mary Somerville",
                "Michael Faraday",
                "John Herschel",
            ],
        ),
    )
    assert store.get_event(event.id).guest_count == 5
    assert_counter_consistent(store, event.id)


def test_attending_to_attending_moves_by_difference(store, event):
    submit_rsvp(store, event.id, make_rsvp(email="other@example.com", name="Grace Hopper"))
    submit_rsvp(
        store,
        event.id,
        make_rsvp(number_of_guests=4, additional_guest_names=["A One", "B Two", "C Three"]),
    )
    assert store.get_event(event.id).guest_count == 5

    submit_rsvp(store, event.id, make_rsvp(number_of_guests=2, additional_guest_names=["A One"]))
    assert store.get_event(event.id).guest_count == 3
    assert_counter_consistent(store, event.id)


def test_counter_never_goes_negative(store, event):
    submit_rsvp(
        store,
        event.id,
        make_rsvp(number_of_guests=3, additional_guest_names=["A One", "B Two"]),
    )
    # Simulate a counter that drifted below the real total
    store.adjust_guest_count(event.id, -2)

    submit_rsvp(store, event.id, make_rsvp(response="declined"))

    assert store.get_event(event.id).guest_count == 0


def test_update_keeps_identity_and_created_at(store, event):
    first = submit_rsvp(store, event.id, make_rsvp(message="See you there"))
    second = submit_rsvp(
        store,
        event.id,
        make_rsvp(email="ADA@Example.com", response="declined", message=None),
    )

    assert second.id == first.id
    assert second.created_at == first.created_at
    assert second.updated_at >= first.updated_at
    assert second.response == "declined"
    assert second.message is None
    assert len(store.list_guests_by_event(event.id)) == 1


def test_single_word_name_is_rejected(store, event):
    with pytest.raises(ValidationError):
        submit_rsvp(store, event.id, make_rsvp(name="Madonna"))

    assert store.list_guests_by_event(event.id) == []


def test_missing_additional_guest_names_are_rejected(store, event):
    with pytest.raises(ValidationError, match="2 additional guests"):
        submit_rsvp(
            store,
            event.id,
            make_rsvp(number_of_guests=3, additional_guest_names=["Charles Babbage"]),
        )
    assert store.get_event(event.id).guest_count == 0


def test_additional_guest_needs_full_name(store, event):
    with pytest.raises(ValidationError, match="Additional guest 2"):
        submit_rsvp(
            store,
            event.id,
            make_rsvp(number_of_guests=3, additional_guest_names=["Charles Babbage", "Cher"]),
        )


def test_declined_rsvp_skips_additional_guest_checks(store, event):
    guest = submit_rsvp(store, event.id, make_rsvp(response="declined", number_of_guests=3))

    assert guest.number_of_guests == 3
    assert store.get_event(event.id).guest_count == 0


def test_extra_additional_guest_names_are_kept(store, event):
    guest = submit_rsvp(
        store,
        event.id,
        make_rsvp(
            number_of_guests=2,
            additional_guest_names=["Charles Babbage", "Mary Somerville"],
        ),
    )

    assert guest.additional_guest_names == ["Charles Babbage", "Mary Somerville"]
    assert store.get_event(event.id).guest_count == 2


def test_rsvp_for_unknown_event(store):
    with pytest.raises(NotFoundError):
        submit_rsvp(store, "missing", make_rsvp())


def test_delete_attending_guest_decrements_counter(store, event):
    guest = submit_rsvp(
        store,
        event.id,
        make_rsvp(number_of_guests=2, additional_guest_names=["Charles Babbage"]),
    )
    submit_rsvp(store, event.id, make_rsvp(email="grace@example.com", name="Grace Hopper"))

    delete_guest(store, event.id, guest.id)

    assert store.get_guest(guest.id) is None
    assert store.get_event(event.id).guest_count == 1
    assert_counter_consistent(store, event.id)


def test_delete_declined_guest_keeps_counter(store, event):
    submit_rsvp(store, event.id, make_rsvp(email="grace@example.com", name="Grace Hopper"))
    declined = submit_rsvp(store, event.id, make_rsvp(response="declined"))

    delete_guest(store, event.id, declined.id)

    assert store.get_event(event.id).guest_count == 1


def test_delete_guest_not_found(store, event):
    with pytest.raises(NotFoundError, match="Guest"):
        delete_guest(store, event.id, "nope")
    with pytest.raises(NotFoundError, match="Event"):
        delete_guest(store, "nope", "nope")


def test_delete_guest_from_other_event_is_not_found(store, event, owner):
    guest = submit_rsvp(store, event.id, make_rsvp())
    other = create_event(
        store,
        owner,
        EventCreate(name="Winter Dinner", date=datetime(2026, 12, 12, 19, 0), location="Main Hall"),
    )

    with pytest.raises(NotFoundError):
        delete_guest(store, other.id, guest.id)
    assert store.get_guest(guest.id) is not None
    assert store.get_event(event.id).guest_count == 1


def test_delete_event_cascades_to_guests(store, event):
    for index in range(4):
        submit_rsvp(
            store,
            event.id,
            make_rsvp(email=f"guest{index}@example.com", name=f"Guest Number{index}"),
        )

    removed = delete_event(store, event.id)

    assert removed == 4
    assert store.get_event(event.id) is None
    assert store.list_guests_by_event(event.id) == []


def test_failed_unit_of_work_leaves_nothing_behind(store, event):
    with pytest.raises(RuntimeError):
        with store.atomic():
            store.put_guest(Guest(event_id=event.id, name="Ghost Guest", email="ghost@example.com"))
            store.adjust_guest_count(event.id, 1)
            raise RuntimeError("boom")

    assert store.list_guests_by_event(event.id) == []
    assert store.get_event(event.id).guest_count == 0


def test_counter_consistent_across_mixed_operations(store, event):
    ada = submit_rsvp(store, event.id, make_rsvp())
    assert_counter_consistent(store, event.id)
    submit_rsvp(
        store,
        event.id,
        make_rsvp(email="grace@example.com", name="Grace Hopper", number_of_guests=2,
                  additional_guest_names=["Vincent Hopper"]),
    )
    assert_counter_consistent(store, event.id)
    submit_rsvp(store, event.id, make_rsvp(response="declined"))
    assert_counter_consistent(store, event.id)
    submit_rsvp(store, event.id, make_rsvp(number_of_guests=3, additional_guest_names=["A One", "B Two"]))
    assert_counter_consistent(store, event.id)
    delete_guest(store, event.id, ada.id)
    assert_counter_consistent(store, event.id)
    assert store.get_event(event.id).guest_count == 2


@pytest.mark.parametrize(
    "previous, response, count, expected",
    [
        (None, "attending", 2, 2),
        (None, "declined", 2, 0),
        (Guest(event_id="e", name="A B", email="a@b.c", response="declined", number_of_guests=4), "attending", 3, 3),
        (Guest(event_id="e", name="A B", email="a@b.c", response="attending", number_of_guests=4), "declined", 1, -4),
        (Guest(event_id="e", name="A B", email="a@b.c", response="attending", number_of_guests=4), "attending", 1, -3),
        (Guest(event_id="e", name="A B", email="a@b.c", response="declined", number_of_guests=4), "declined", 9, 0),
    ],
)
def test_counter_delta(previous, response, count, expected):
    assert counter_delta(previous, response, count) == expected


@pytest.fixture(params=["memory", "sqlite-file"])
def shared_store(request, tmp_path):
    """A store several threads can write to at once."""
    if request.param == "memory":
        yield MemoryEventStore()
        return
    engine = build_engine(f"sqlite:///{tmp_path / 'rsvp.db'}")
    init_db(engine)
    yield SqlEventStore(engine)
    engine.dispose()


@pytest.fixture
def shared_event(shared_store):
    with shared_store.atomic():
        owner = shared_store.put_user(User(id="owner-2", email="lee@example.com", name="Lee Host"))
    return create_event(
        shared_store,
        owner,
        EventCreate(name="Launch", date=datetime(2026, 9, 1, 19, 0), location="Pier 9"),
    )


def run_together(count, target):
    barrier = threading.Barrier(count)
    errors = []

    def worker(index):
        barrier.wait()
        try:
            target(index)
        except Exception as exc:  # collected and asserted on below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return errors


def test_concurrent_rsvps_do_not_lose_updates(shared_store, shared_event):
    def submit(index):
        submit_rsvp(
            shared_store,
            shared_event.id,
            make_rsvp(email=f"guest{index}@example.com", name=f"Guest Number{index}"),
        )

    errors = run_together(10, submit)

    assert errors == []
    assert shared_store.get_event(shared_event.id).guest_count == 10
    assert len(shared_store.list_guests_by_event(shared_event.id)) == 10


def test_concurrent_duplicate_rsvps_update_one_guest(shared_store, shared_event):
    submission = make_rsvp(number_of_guests=2, additional_guest_names=["Charles Babbage"])

    errors = run_together(5, lambda _: submit_rsvp(shared_store, shared_event.id, submission))

    assert errors == []
    guests = shared_store.list_guests_by_event(shared_event.id)
    assert len(guests) == 1
    assert shared_store.get_event(shared_event.id).guest_count == 2
    assert_counter_consistent(shared_store, shared_event.id)


def test_conflicting_insert_is_retried_as_update(store, event, monkeypatch):
    submit_rsvp(store, event.id, make_rsvp())
    real_find_guest = store.find_guest
    calls = []

    def find_guest_missing_once(event_id, email, *, for_update=False):
        calls.append(email)
        if len(calls) == 1:
            return None
        return real_find_guest(event_id, email, for_update=for_update)

    def put_guest_conflicting_once(guest, _real=store.put_guest):
        if len(calls) == 1:
            raise ConflictError("duplicate guest")
        return _real(guest)

    monkeypatch.setattr(store, "find_guest", find_guest_missing_once)
    monkeypatch.setattr(store, "put_guest", put_guest_conflicting_once)

    guest = submit_rsvp(store, event.id, make_rsvp(response="declined"))

    assert len(calls) == 2
    assert guest.response == "declined"
    assert len(store.list_guests_by_event(event.id)) == 1
    assert store.get_event(event.id).guest_count == 0
