"""
Flujo completo de la API sobre los repositorios SQL.

Reserva, pago, confirmación y auditoría contra SQLite in-memory; cada request
abre y cierra su propia sesión.
"""

from sqlalchemy import func, select

from marketplace.infrastructure.db.tables import audit_logs, bookings, notifications, payments


async def test_service_details_from_database(sql_api, seed):
    res = await sql_api.get(f"/api/v1/services/{seed.service_id}", headers=seed.public_headers())

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["service"]["provider"]["name"] == "Sparkle Co"
    assert data["service"]["category"]["name"] == "Cleaning"
    assert [addon["id"] for addon in data["addons"]] == [seed.required_addon_id, seed.optional_addon_id]


async def test_booking_payment_and_confirmation(sql_api, seed, test_engine, booking_payload):
    created = await sql_api.post(
        "/api/v1/bookings",
        json=booking_payload,
        headers={**seed.customer_headers(), "Idempotency-Key": "sql-k1"},
    )
    assert created.status_code == 201, created.text
    booking_id = created.json()["bookingId"]

    replay = await sql_api.post(
        "/api/v1/bookings",
        json=booking_payload,
        headers={**seed.customer_headers(), "Idempotency-Key": "sql-k1"},
    )
    assert replay.json() == created.json()

    slots = await sql_api.get(
        "/api/v1/bookings/available-slots",
        params={"serviceId": seed.service_id, "providerId": seed.provider_id, "date": seed.day},
        headers=seed.public_headers(),
    )
    assert "10:00" not in slots.json()["availableSlots"]

    paid = await sql_api.post(
        "/api/v1/payments",
        json={"bookingId": booking_id, "paymentMethod": "card", "paymentGatewayReference": "CARD_4242"},
        headers=seed.customer_headers(),
    )
    assert paid.status_code == 201, paid.text
    assert paid.json()["status"] == "completed"

    confirmed = await sql_api.put(f"/api/v1/bookings/{booking_id}/confirm", headers=seed.customer_headers())
    assert confirmed.status_code == 200, confirmed.text
    assert confirmed.json()["status"] == "confirmed"

    async with test_engine.connect() as conn:
        row = (await conn.execute(select(bookings).where(bookings.c.id == booking_id))).mappings().one()
        booking_count = (await conn.execute(select(func.count()).select_from(bookings))).scalar_one()
        payment_count = (await conn.execute(select(func.count()).select_from(payments))).scalar_one()
        notification_count = (await conn.execute(select(func.count()).select_from(notifications))).scalar_one()
        actions = (await conn.execute(select(audit_logs.c.action))).scalars().all()

    assert row["status"] == "confirmed"
    assert row["payment_status"] == "paid"
    assert booking_count == 1
    assert payment_count == 1
    assert notification_count == 1
    assert sorted(actions) == ["booking.confirm", "customer.booking.create", "payment.create"]


async def test_conflicting_booking_is_rejected(sql_api, seed, booking_payload):
    first = await sql_api.post("/api/v1/bookings", json=booking_payload, headers=seed.customer_headers())
    assert first.status_code == 201

    second = await sql_api.post(
        "/api/v1/bookings",
        json={**booking_payload, "scheduledAt": f"{seed.day}T10:30:00"},
        headers=seed.customer_headers(),
    )

    assert second.status_code == 409


async def test_declined_payment_is_not_persisted(sql_api, seed, test_engine, booking_payload):
    created = await sql_api.post("/api/v1/bookings", json=booking_payload, headers=seed.customer_headers())
    booking_id = created.json()["bookingId"]

    declined = await sql_api.post(
        "/api/v1/payments",
        json={"bookingId": booking_id, "paymentMethod": "card", "paymentGatewayReference": "CARD_0002"},
        headers=seed.customer_headers(),
    )

    assert declined.status_code == 402
    async with test_engine.connect() as conn:
        payment_count = (await conn.execute(select(func.count()).select_from(payments))).scalar_one()
        row = (await conn.execute(select(bookings.c.payment_status))).one()
    assert payment_count == 0
    assert row.payment_status == "pending"


async def test_profile_update_persists(sql_api, seed):
    res = await sql_api.put(
        "/api/v1/customer/profile",
        json={"firstName": "Sarah", "address": "7 Tahlia Street, Jeddah"},
        headers=seed.customer_headers(),
    )
    assert res.status_code == 200

    me = await sql_api.get("/api/v1/auth/me", headers=seed.customer_headers())

    assert me.json()["user"]["firstName"] == "Sarah"
    assert me.json()["user"]["address"] == "7 Tahlia Street, Jeddah"
    assert me.json()["user"]["phone"] == "0501234567"


async def test_audit_log_admin_crud(sql_api, seed):
    created = await sql_api.post(
        "/api/v1/admin/audit-logs",
        json={"action": "service.update", "resourceType": "service", "resourceId": "svc-1", "changes": {"price": 120}},
        headers=seed.admin_headers(),
    )
    assert created.status_code == 201, created.text
    log_id = created.json()["auditLog"]["id"]

    listed = await sql_api.get(
        "/api/v1/admin/audit-logs",
        params={"search": "svc-1"},
        headers=seed.admin_headers(),
    )
    assert listed.json()["pagination"]["total"] == 1

    updated = await sql_api.put(
        f"/api/v1/admin/audit-logs/{log_id}",
        json={"changes": {"price": 130}},
        headers=seed.admin_headers(),
    )
    assert updated.json()["auditLog"]["changes"] == {"price": 130}

    removed = await sql_api.post(
        "/api/v1/admin/audit-logs/bulk-delete",
        json={"ids": [log_id]},
        headers=seed.admin_headers(),
    )
    assert removed.json()["deletedCount"] == 1
