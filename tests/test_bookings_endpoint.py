from decimal import Decimal

ALL_SLOTS = [f"{hour:02d}:{minute:02d}" for hour in range(9, 18) for minute in (0, 30)]


def _slots(client, seed, **params):
    query = {"serviceId": seed.service_id, "providerId": seed.provider_id, "date": seed.day}
    query.update(params)
    return client.get("/api/v1/bookings/available-slots", params=query, headers=seed.public_headers())


# --- Horarios disponibles ---


def test_all_slots_free_on_empty_day(client, seed):
    res = _slots(client, seed)

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["availableSlots"] == ALL_SLOTS
    assert body["duration"] == 60


def test_booked_interval_removes_overlapping_slots(client, seed, create_booking):
    create_booking()  # 10:00 - 11:00

    slots = _slots(client, seed).json()["availableSlots"]

    assert "09:30" not in slots
    assert "10:00" not in slots
    assert "10:30" not in slots
    assert "09:00" in slots
    assert "11:00" in slots
    assert len(slots) == len(ALL_SLOTS) - 3


def test_cancelled_booking_frees_the_slot(client, seed, bundle, create_booking):
    booking = create_booking()
    bundle["booking_repo"].bookings[booking["bookingId"]].status = "cancelled"

    assert _slots(client, seed).json()["availableSlots"] == ALL_SLOTS


def test_booking_in_other_tenant_does_not_block(client, seed, bundle, create_booking):
    booking = create_booking()
    bundle["booking_repo"].bookings[booking["bookingId"]].tenant_id = seed.other_tenant_id

    assert _slots(client, seed).json()["availableSlots"] == ALL_SLOTS


def test_other_day_is_not_affected(client, seed, create_booking):
    create_booking()

    res = _slots(client, seed, date="2030-01-16")

    assert res.json()["availableSlots"] == ALL_SLOTS


def test_slots_require_all_parameters(client, seed):
    res = client.get(
        "/api/v1/bookings/available-slots",
        params={"serviceId": seed.service_id, "date": seed.day},
        headers=seed.public_headers(),
    )

    assert res.status_code == 400
    assert res.json()["detail"] == "Service ID, Provider ID, and date are required"


def test_slots_reject_malformed_date(client, seed):
    res = _slots(client, seed, date="15/01/2030")

    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"


def test_slots_for_unknown_service(client, seed):
    res = _slots(client, seed, serviceId="does-not-exist")

    assert res.status_code == 404


# --- Crear reserva ---


def test_create_booking(client, seed, bundle, booking_payload):
    res = client.post("/api/v1/bookings", json=booking_payload, headers=seed.customer_headers())

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["totalAmount"] == 145.0
    assert body["status"] == "pending"
    assert body["paymentStatus"] == "pending"

    stored = bundle["booking_repo"].bookings[body["bookingId"]]
    assert stored.customer_id == seed.customer_id
    assert stored.total_amount == Decimal("145.00")
    assert stored.commission_amount == Decimal("14.50")
    assert stored.duration_minutes == 60
    assert sorted(addon.addon_id for addon in stored.addons) == sorted(
        [seed.required_addon_id, seed.optional_addon_id]
    )


def test_create_booking_writes_audit_record(client, seed, bundle, create_booking):
    booking = create_booking()

    records = list(bundle["audit_log_repo"].records.values())
    assert len(records) == 1
    record = records[0]
    assert record.action == "customer.booking.create"
    assert record.resource_type == "booking"
    assert record.resource_id == booking["bookingId"]
    assert record.user_id == seed.customer_id
    assert record.ip_address == "testclient"


def test_unknown_addon_ids_are_ignored(create_booking, seed):
    body = create_booking(addons=[seed.required_addon_id, "not-an-addon"])

    assert body["totalAmount"] == 120.0


def test_missing_required_addon_is_rejected(client, seed, booking_payload):
    payload = {**booking_payload, "addons": [seed.optional_addon_id]}

    res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())

    assert res.status_code == 400
    assert res.json()["code"] == "REQUIRED_ADDON_MISSING"


def test_double_booking_is_rejected(client, seed, booking_payload, create_booking):
    create_booking()

    res = client.post("/api/v1/bookings", json=booking_payload, headers=seed.customer_headers())

    assert res.status_code == 409
    assert res.json()["detail"] == "Selected time slot is not available"


def test_overlapping_booking_is_rejected(client, seed, booking_payload, create_booking):
    create_booking()
    payload = {**booking_payload, "scheduledAt": f"{seed.day}T10:30:00"}

    res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())

    assert res.status_code == 409


def test_adjacent_booking_is_accepted(create_booking, seed):
    create_booking()

    body = create_booking(scheduledAt=f"{seed.day}T11:00:00")

    assert body["status"] == "pending"


def test_provider_must_own_the_service(client, seed, booking_payload):
    payload = {**booking_payload, "providerId": "someone-else"}

    res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())

    assert res.status_code == 404
    assert res.json()["detail"] == "Service not found or not available"


def test_invalid_payment_type_is_rejected(client, seed, booking_payload):
    payload = {**booking_payload, "paymentType": "bitcoin"}

    res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())

    assert res.status_code == 422


def test_short_address_is_rejected(client, seed, booking_payload):
    payload = {**booking_payload, "customerAddress": "  short  "}

    res = client.post("/api/v1/bookings", json=payload, headers=seed.customer_headers())

    assert res.status_code == 422
    assert "Address is required (min 10 characters)" in res.text


def test_create_booking_requires_user(client, seed, booking_payload):
    res = client.post("/api/v1/bookings", json=booking_payload, headers=seed.public_headers())

    assert res.status_code == 401


def test_create_booking_idempotent_replay(client, seed, bundle, booking_payload):
    headers = {**seed.customer_headers(), "Idempotency-Key": "booking-k1"}

    first = client.post("/api/v1/bookings", json=booking_payload, headers=headers)
    replay = client.post("/api/v1/bookings", json=booking_payload, headers=headers)

    assert first.status_code == 201
    assert replay.status_code == 201
    assert first.json() == replay.json()
    assert len(bundle["booking_repo"].bookings) == 1


def test_create_booking_idempotency_conflict(client, seed, booking_payload):
    headers = {**seed.customer_headers(), "Idempotency-Key": "booking-k2"}
    client.post("/api/v1/bookings", json=booking_payload, headers=headers)

    changed = {**booking_payload, "scheduledAt": f"{seed.day}T15:00:00"}
    res = client.post("/api/v1/bookings", json=changed, headers=headers)

    assert res.status_code == 409
    assert res.json()["code"] == "IDEMPOTENCY_CONFLICT"


# --- Listar reservas propias ---


def test_list_bookings_returns_only_own(client, seed, create_booking):
    own = create_booking()
    client.post(
        "/api/v1/bookings",
        json={
            "serviceId": seed.service_id,
            "providerId": seed.provider_id,
            "scheduledAt": f"{seed.day}T14:00:00",
            "customerAddress": "5 Olaya Street, Riyadh",
            "addons": [seed.required_addon_id],
            "paymentType": "cash_on_delivery",
        },
        headers=seed.customer_headers(seed.other_customer_id),
    )

    res = client.get("/api/v1/bookings", headers=seed.customer_headers())

    assert res.status_code == 200
    bookings = res.json()["bookings"]
    assert [booking["id"] for booking in bookings] == [own["bookingId"]]
    assert bookings[0]["totalAmount"] == 145.0
    assert bookings[0]["paymentType"] == "instant"


# --- Confirmar reserva ---


def test_confirm_cash_booking_notifies_provider(client, seed, bundle, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.customer_headers(),
    )

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "confirmed"
    assert body["alreadyConfirmed"] is False
    notifications = bundle["notification_repo"].notifications
    assert len(notifications) == 1
    assert notifications[0].user_id == seed.provider_user_id
    assert notifications[0].type == "new_booking"
    assert notifications[0].data == {"booking_id": booking["bookingId"]}
    actions = [record.action for record in bundle["audit_log_repo"].records.values()]
    assert "booking.confirm" in actions


def test_confirm_is_idempotent(client, seed, bundle, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")
    url = f"/api/v1/bookings/{booking['bookingId']}/confirm"

    client.put(url, headers=seed.customer_headers())
    again = client.put(url, headers=seed.customer_headers())

    assert again.status_code == 200
    assert again.json()["alreadyConfirmed"] is True
    assert len(bundle["notification_repo"].notifications) == 1


def test_confirm_instant_booking_requires_payment(client, seed, create_booking):
    booking = create_booking()

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.customer_headers(),
    )

    assert res.status_code == 400
    assert res.json()["detail"] == "Payment not completed"


def test_confirm_by_provider_user(client, seed, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.provider_headers(),
    )

    assert res.status_code == 200


def test_confirm_by_admin(client, seed, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.admin_headers(),
    )

    assert res.status_code == 200


def test_confirm_by_stranger_is_not_found(client, seed, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.customer_headers(seed.other_customer_id),
    )

    assert res.status_code == 404


def test_confirm_unknown_booking(client, seed):
    res = client.put("/api/v1/bookings/missing/confirm", headers=seed.customer_headers())

    assert res.status_code == 404
    assert res.json()["detail"] == "Booking not found"


def test_confirm_cancelled_booking_is_rejected(client, seed, bundle, create_booking):
    booking = create_booking(paymentType="cash_on_delivery")
    bundle["booking_repo"].bookings[booking["bookingId"]].status = "cancelled"

    res = client.put(
        f"/api/v1/bookings/{booking['bookingId']}/confirm",
        headers=seed.customer_headers(),
    )

    assert res.status_code == 400
    assert res.json()["code"] == "INVALID_BOOKING_STATUS"
