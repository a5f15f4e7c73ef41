"""HTTP-level tests for the v1 booking, pricing, trainer and referral routes."""

from datetime import time, timedelta

from thaikick.core.enums import BookingStatus, BookingType
from thaikick.models import Booking

from ..factories import (
    MONDAY,
    create_booking,
    create_course,
    create_slot,
    create_trainer,
    weeks_after,
)


def test_quote_flash_sale_private(client, db, flash_sale_gym, affiliate):
    trainer = create_trainer(db, flash_sale_gym, price_per_session=300)
    slot = create_slot(db, trainer)

    response = client.post(
        "/api/v1/pricing/quote",
        json={
            "gym_id": flash_sale_gym.id,
            "booking_type": "private",
            "start_date": MONDAY.isoformat(),
            "end_date": weeks_after(MONDAY, 2).isoformat(),
            "trainer_id": trainer.id,
            "schedule_id": slot.id,
            "referral_code": "NOK10",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["session_count"] == 3
    assert body["price_per_session"] == 700
    assert body["total_price"] == 2100
    assert body["row_price"] == 700
    assert body["commission_per_row"] == 70
    assert body["commission_paid_to"] == "NOK10"
    assert body["currency"] == "THB"


def test_quote_missing_start_date_is_400(client, gym):
    response = client.post(
        "/api/v1/pricing/quote", json={"gym_id": gym.id, "booking_type": "standard"}
    )
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "START_DATE_REQUIRED"


def test_quote_end_before_start_is_400(client, gym):
    response = client.post(
        "/api/v1/pricing/quote",
        json={
            "gym_id": gym.id,
            "booking_type": "standard",
            "start_date": MONDAY.isoformat(),
            "end_date": (MONDAY - timedelta(days=1)).isoformat(),
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "END_BEFORE_START"


def test_quote_rejects_unknown_fields(client, gym):
    response = client.post(
        "/api/v1/pricing/quote",
        json={"gym_id": gym.id, "booking_type": "standard", "coupon": "FREE"},
    )
    assert response.status_code == 422


def test_quote_unknown_gym_is_404(client):
    response = client.post(
        "/api/v1/pricing/quote",
        json={"gym_id": "missing", "booking_type": "standard", "start_date": MONDAY.isoformat()},
    )
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "GYM_NOT_FOUND"


def test_checkout_then_fetch_and_cancel(client, db, gym, customer):
    response = client.post(
        "/api/v1/bookings",
        json={
            "user_id": customer.id,
            "gym_id": gym.id,
            "booking_type": "standard",
            "start_date": MONDAY.isoformat(),
            "end_date": (MONDAY + timedelta(days=6)).isoformat(),
        },
    )
    assert response.status_code == 201
    rows = response.json()
    assert len(rows) == 7
    assert all(row["total_price"] == 500 for row in rows)

    booking_id = rows[0]["id"]
    assert client.get(f"/api/v1/bookings/{booking_id}").json()["status"] == "confirmed"

    cancelled = client.patch(f"/api/v1/bookings/{booking_id}/status", json={"status": "cancelled"})
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    revived = client.patch(f"/api/v1/bookings/{booking_id}/status", json={"status": "confirmed"})
    assert revived.status_code == 422
    assert revived.json()["detail"]["code"] == "INVALID_STATUS_TRANSITION"

    listed = client.get("/api/v1/bookings", params={"user_id": customer.id})
    assert len(listed.json()) == 7


def test_checkout_over_range_limit_is_400_and_writes_nothing(client, db, gym, customer):
    response = client.post(
        "/api/v1/bookings",
        json={
            "user_id": customer.id,
            "gym_id": gym.id,
            "booking_type": "standard",
            "start_date": MONDAY.isoformat(),
            "end_date": (MONDAY + timedelta(days=3652)).isoformat(),
        },
    )
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "RANGE_TOO_LONG"
    assert db.query(Booking).count() == 0


def test_checkout_conflict_is_409(client, db, gym, trainer, customer):
    slot = create_slot(db, trainer)
    create_booking(
        db,
        gym,
        customer,
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
    )

    response = client.post(
        "/api/v1/bookings",
        json={
            "user_id": customer.id,
            "gym_id": gym.id,
            "booking_type": "private",
            "start_date": MONDAY.isoformat(),
            "trainer_id": trainer.id,
            "schedule_id": slot.id,
        },
    )
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "AVAILABILITY_CONFLICT"


def test_private_booking_rows_serialize_times(client, db, gym, trainer, customer):
    slot = create_slot(db, trainer, start=time(18, 30), end=time(19, 30))
    response = client.post(
        "/api/v1/bookings",
        json={
            "user_id": customer.id,
            "gym_id": gym.id,
            "booking_type": "private",
            "start_date": MONDAY.isoformat(),
            "trainer_id": trainer.id,
            "schedule_id": slot.id,
        },
    )
    assert response.status_code == 201
    row = response.json()[0]
    assert (row["start_time"], row["end_time"]) == ("18:30", "19:30")


def test_available_slots(client, db, gym, trainer, customer, monday_slots):
    create_booking(
        db,
        gym,
        customer,
        type=BookingType.PRIVATE.value,
        trainer_id=trainer.id,
        start_time=time(9, 0),
    )

    response = client.get(
        f"/api/v1/trainers/{trainer.id}/available-slots", params={"date": MONDAY.isoformat()}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["day_of_week"] == "Monday"
    assert [slot["start_time"] for slot in body["slots"]] == ["10:00"]

    tuesday = client.get(
        f"/api/v1/trainers/{trainer.id}/available-slots",
        params={"date": (MONDAY + timedelta(days=1)).isoformat()},
    )
    assert tuesday.json()["slots"] == []


def test_schedule_crud(client, trainer):
    created = client.post(
        f"/api/v1/trainers/{trainer.id}/schedules",
        json={"day_of_week": "Wednesday", "start_time": "07:00", "end_time": "08:00"},
    )
    assert created.status_code == 201
    schedule_id = created.json()["id"]

    duplicate = client.post(
        f"/api/v1/trainers/{trainer.id}/schedules",
        json={"day_of_week": "Wednesday", "start_time": "07:00", "end_time": "09:00"},
    )
    assert duplicate.status_code == 409

    assert len(client.get(f"/api/v1/trainers/{trainer.id}/schedules").json()) == 1
    assert client.delete(f"/api/v1/trainers/{trainer.id}/schedules/{schedule_id}").status_code == 204
    assert client.get(f"/api/v1/trainers/{trainer.id}/schedules").json() == []


def test_gym_courses_hide_inactive(client, db, gym):
    create_course(db, gym, title="Open Course")
    create_course(db, gym, title="Closed Course", is_active=False)

    response = client.get(f"/api/v1/gyms/{gym.id}/courses")
    assert [course["title"] for course in response.json()] == ["Open Course"]


def test_gym_details_and_bookings(client, db, gym, trainer, customer):
    create_booking(db, gym, customer, status=BookingStatus.COMPLETED.value)

    details = client.get(f"/api/v1/gyms/{gym.id}").json()
    assert details["base_price"] == 500
    assert [t["id"] for t in details["trainers"]] == [trainer.id]

    bookings = client.get(f"/api/v1/gyms/{gym.id}/bookings").json()
    assert [b["status"] for b in bookings] == ["completed"]

    assert client.get("/api/v1/gyms/missing").status_code == 404


def test_referral_routes(client, db, gym, customer, affiliate):
    create_booking(db, gym, customer, commission_paid_to="NOK10", commission_amount=40)

    assert client.get("/api/v1/referrals/NOK10/validate").json() == {"code": "NOK10", "valid": True}
    assert client.get("/api/v1/referrals/NOPE/validate").json()["valid"] is False

    summary = client.get("/api/v1/referrals/NOK10/summary").json()
    assert summary == {
        "code": "NOK10",
        "is_active": True,
        "bookings_count": 1,
        "commission_total": 40,
    }


def test_health_and_metrics(client):
    health = client.get("/api/v1/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"

    client.post("/api/v1/pricing/quote", json={"gym_id": "missing", "booking_type": "standard"})
    metrics = client.get("/api/v1/metrics/prometheus")
    assert metrics.status_code == 200
    assert "thaikick_service_operations_total" in metrics.text
