from uuid import uuid4

import pytest

API = "/api/v1"

EVENT_PAYLOAD = {
    "title": "Sommernachtstraum",
    "description": "Open Air",
    "venue": "Stadtpark",
    "date": "2026-07-11T20:00:00",
    "layout_type": "LEGACY",
    "left_rows": 2,
    "left_cols": 3,
    "right_rows": 1,
    "right_cols": 2,
    "back_rows": 1,
    "back_cols": 2,
}


def booking_payload(event_id, seat_ids, tickets, /, **overrides):
    payload = {
        "event_id": event_id,
        "seat_ids": seat_ids,
        "customer_first_name": "Erika",
        "customer_last_name": "Mustermann",
        "seller_first_name": "Sven",
        "seller_last_name": "Verkauf",
        "ticket_numbers": tickets,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def created_event(client):
    response = client.post(f"{API}/admin/events/", json=EVENT_PAYLOAD)
    assert response.status_code == 201, response.text
    return response.json()


def seat_ids_by_label(client, event_id):
    seats = client.get(f"{API}/events/{event_id}/seats").json()
    return {f"{s['section']} {s['row']}{s['number']}": s["id"] for s in seats}


def test_root(client):
    assert client.get("/").json() == {"Hello": "Seatbook"}


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


def test_create_event_computes_total_seats(created_event):
    assert created_event["total_seats"] == 6 + 2 + 2
    assert created_event["title"] == "Sommernachtstraum"


def test_create_event_rejects_negative_rows(client):
    response = client.post(f"{API}/admin/events/", json={**EVENT_PAYLOAD, "left_rows": -1})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation"
    assert "left_rows" in body["message"]


def test_create_event_rejects_empty_layout(client):
    payload = {**EVENT_PAYLOAD, "left_rows": 0, "right_rows": 0, "back_rows": 0}
    response = client.post(f"{API}/admin/events/", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "validation"


def test_create_flexible_event_requires_row_groups(client):
    response = client.post(f"{API}/admin/events/", json={**EVENT_PAYLOAD, "layout_type": "FLEXIBLE"})
    assert response.status_code == 400


def test_event_detail_has_ordered_seats_and_seat_map(client):
    payload = {
        **EVENT_PAYLOAD,
        "layout_type": "FLEXIBLE",
        "left_rows": 0,
        "left_cols": 0,
        "right_rows": 0,
        "right_cols": 0,
        "row_groups": [
            {"row_count": 2, "seats_per_row": 4, "aisle_after_seat": 2},
            {"row_count": 1, "seats_per_row": 6},
        ],
        "back_rows": 1,
        "back_cols": 3,
        "back_aisle_after_seat": 1,
    }
    event_id = client.post(f"{API}/admin/events/", json=payload).json()["id"]

    response = client.get(f"{API}/events/{event_id}")

    assert response.status_code == 200
    detail = response.json()
    assert detail["total_seats"] == 4 + 4 + 6 + 3
    main = [(s["row"], s["number"]) for s in detail["seats"] if s["section"] == "MAIN"]
    assert main == sorted(main)
    assert detail["row_aisles"] == {"A": 2, "B": 2, "C": 0}
    assert [(r["section"], r["label"], r["aisle_after_seat"]) for r in detail["seat_map"]] == [
        ("MAIN", "A", 2),
        ("MAIN", "B", 2),
        ("MAIN", "C", 0),
        ("RANG", "A", 1),
    ]
    assert [s["number"] for s in detail["seat_map"][2]["seats"]] == [1, 2, 3, 4, 5, 6]


def test_unknown_event_is_not_found(client):
    response = client.get(f"{API}/events/{uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"error": "not_found", "message": "Event not found"}


def test_list_events_reports_counts(client, created_event):
    seats = seat_ids_by_label(client, created_event["id"])
    client.post(
        f"{API}/bookings/",
        json=booking_payload(created_event["id"], [seats["LEFT A1"]], ["T-1"]),
    )

    listed = client.get(f"{API}/events/").json()

    assert len(listed) == 1
    assert listed[0]["booked_seats"] == 1
    assert listed[0]["available_seats"] == 9


def test_update_and_delete_event(client, created_event):
    event_id = created_event["id"]

    response = client.patch(f"{API}/admin/events/{event_id}", json={"venue": "Theaterhaus"})
    assert response.status_code == 200
    assert response.json()["venue"] == "Theaterhaus"
    assert response.json()["total_seats"] == 10

    response = client.delete(f"{API}/admin/events/{event_id}")
    assert response.status_code == 200
    assert response.json() == {"id": event_id, "deleted": True}
    assert client.get(f"{API}/events/{event_id}").status_code == 404


def test_layout_change_after_booking_is_rejected(client, created_event):
    event_id = created_event["id"]
    seats = seat_ids_by_label(client, event_id)
    client.post(f"{API}/bookings/", json=booking_payload(event_id, [seats["LEFT A1"]], ["T-1"]))

    response = client.patch(f"{API}/admin/events/{event_id}", json={"left_cols": 8})

    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


# ---------------------------------------------------------------------------
# Bookings
# ---------------------------------------------------------------------------


def test_book_seats(client, created_event):
    event_id = created_event["id"]
    seats = seat_ids_by_label(client, event_id)

    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(event_id, [seats["LEFT A1"], seats["LEFT A2"]], ["T-1", "Freikarte"]),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["booking"]["customer_last_name"] == "Mustermann"
    assert [s["ticket_number"] for s in body["seats"]] == ["T-1", "Freikarte"]
    assert all(s["status"] == "BOOKED" for s in body["seats"])
    assert all(s["booked_by"] == "Erika Mustermann" for s in body["seats"])

    booking = client.get(f"{API}/bookings/{body['booking']['id']}").json()
    assert {s["id"] for s in booking["seats"]} == {seats["LEFT A1"], seats["LEFT A2"]}


def test_booking_a_taken_seat_is_a_conflict(client, created_event):
    event_id = created_event["id"]
    seats = seat_ids_by_label(client, event_id)
    client.post(f"{API}/bookings/", json=booking_payload(event_id, [seats["LEFT A1"]], ["T-1"]))

    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(event_id, [seats["LEFT A2"], seats["LEFT A1"]], ["T-2", "T-3"]),
    )

    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "conflict"
    assert body["seat_ids"] == [seats["LEFT A1"]]
    status = {s["id"]: s["status"] for s in client.get(f"{API}/events/{event_id}/seats").json()}
    assert status[seats["LEFT A2"]] == "AVAILABLE"


def test_reused_ticket_number_is_a_conflict(client, created_event):
    event_id = created_event["id"]
    seats = seat_ids_by_label(client, event_id)
    client.post(f"{API}/bookings/", json=booking_payload(event_id, [seats["LEFT A1"]], ["T-1"]))

    response = client.post(f"{API}/bookings/", json=booking_payload(event_id, [seats["LEFT A2"]], ["T-1"]))

    assert response.status_code == 409
    assert response.json()["ticket_numbers"] == ["T-1"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"seat_ids": []},
        {"customer_first_name": ""},
        {"seller_last_name": None},
        {"ticket_numbers": []},
        {"ticket_numbers": ["T-1", "T-2"]},
    ],
)
def test_invalid_booking_requests(client, created_event, overrides):
    seats = seat_ids_by_label(client, created_event["id"])

    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(created_event["id"], [seats["LEFT A1"]], ["T-1"], **overrides),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "validation"


def test_malformed_seat_id_is_a_validation_error(client, created_event):
    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(created_event["id"], ["seat-1"], ["T-1"]),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "validation"


def test_unknown_seat_is_not_found(client, created_event):
    missing = str(uuid4())

    response = client.post(
        f"{API}/bookings/",
        json=booking_payload(created_event["id"], [missing], ["T-1"]),
    )

    assert response.status_code == 404
    assert response.json()["seat_ids"] == [missing]


def test_unknown_booking(client):
    response = client.get(f"{API}/bookings/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_admin_lists_event_bookings(client, created_event):
    event_id = created_event["id"]
    seats = seat_ids_by_label(client, event_id)
    client.post(f"{API}/bookings/", json=booking_payload(event_id, [seats["LEFT A1"]], ["T-1"]))
    client.post(
        f"{API}/bookings/",
        json=booking_payload(event_id, [seats["RIGHT A1"], seats["RIGHT A2"]], ["T-2", "T-3"]),
    )

    bookings = client.get(f"{API}/admin/events/{event_id}/bookings").json()

    assert len(bookings) == 2
    assert sorted(len(b["seats"]) for b in bookings) == [1, 2]


def test_seats_of_unknown_event(client):
    response = client.get(f"{API}/events/{uuid4()}/seats")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"
