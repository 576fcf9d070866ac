import csv
import io
from datetime import datetime, timezone

from rsvp_app.models import Guest
from rsvp_app.services.aggregation import summarize_guests
from rsvp_app.services.export import CSV_HEADERS, guests_to_csv


def _guest(name, response="attending", number_of_guests=1, **extra):
    return Guest(
        event_id="event-1",
        name=name,
        email=f"{name.split()[0].lower()}@example.com",
        response=response,
        number_of_guests=number_of_guests,
        **extra,
    )


def test_empty_guest_list():
    stats = summarize_guests([])

    assert stats.attending_count == 0
    assert stats.declined_count == 0
    assert stats.total_guests == 0
    assert stats.response_count == 0
    assert stats.response_rate == 0


def test_counts_and_headcount():
    guests = [
        _guest("Ada Lovelace", number_of_guests=3),
        _guest("Grace Hopper"),
        _guest("Alan Turing", response="declined", number_of_guests=2),
    ]

    stats = summarize_guests(guests, guest_count=4)

    assert stats.attending_count == 2
    assert stats.declined_count == 1
    assert stats.total_guests == 4
    assert stats.response_count == 3
    assert stats.response_rate == 1.0
    assert stats.guest_count == 4


def test_response_rate_against_invitation_list():
    guests = [_guest("Ada Lovelace"), _guest("Alan Turing", response="declined")]

    stats = summarize_guests(guests, invited=8)

    assert stats.response_rate == 0.25


def test_response_rate_is_rounded():
    stats = summarize_guests([_guest("Ada Lovelace")], invited=3)

    assert stats.response_rate == 0.3333


def test_csv_export_layout():
    guests = [
        _guest(
            "Ada Lovelace",
            number_of_guests=2,
            additional_guest_names=["Charles Babbage"],
            dietary_restrictions="Vegetarian",
            message='Bringing "the" pie, truly',
            created_at=datetime(2026, 4, 2, 8, 0, tzinfo=timezone.utc),
            updated_at=datetime(2026, 5, 1, 9, 30, 15, 123456, tzinfo=timezone.utc),
        ),
        _guest("Alan Turing", response="declined"),
    ]

    rows = list(csv.reader(io.StringIO(guests_to_csv(guests))))

    assert rows[0] == CSV_HEADERS
    assert rows[1] == [
        "Ada Lovelace",
        "ada@example.com",
        "attending",
        "2",
        "Charles Babbage",
        "Vegetarian",
        'Bringing "the" pie, truly',
        "2026-05-01T09:30:15+00:00",
    ]
    assert rows[2][2] == "declined"
    assert rows[2][4:7] == ["", "", ""]
    assert len(rows) == 3


def test_csv_export_of_no_guests_has_only_headers():
    rows = list(csv.reader(io.StringIO(guests_to_csv([]))))

    assert rows == [CSV_HEADERS]
