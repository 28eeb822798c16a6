import os
import random
import uuid

from locust import HttpUser, between, task

# Datos sembrados por scripts/seed_db.py
TENANT_ID = os.getenv("LOAD_TENANT_ID", "demo-tenant")
CUSTOMER_ID = os.getenv("LOAD_CUSTOMER_ID", "demo-customer")
SERVICE_ID = os.getenv("LOAD_SERVICE_ID", "demo-service-cleaning")
PROVIDER_ID = os.getenv("LOAD_PROVIDER_ID", "demo-provider")
REQUIRED_ADDON_ID = os.getenv("LOAD_REQUIRED_ADDON_ID", "demo-addon-supplies")


class BookingUser(HttpUser):
    # Wait between 1 and 3 seconds between tasks
    wait_time = between(1, 3)

    def on_start(self):
        """Cada usuario simulado reserva en su propio día para no chocar con los demás."""
        self.headers = {
            "X-Tenant-Id": TENANT_ID,
            "X-User-Id": CUSTOMER_ID,
            "X-User-Role": "customer",
        }
        self.day = f"2031-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}"

    @task(3)
    def available_slots(self):
        self.client.get(
            "/api/v1/bookings/available-slots",
            params={"serviceId": SERVICE_ID, "providerId": PROVIDER_ID, "date": self.day},
            headers={"X-Tenant-Id": TENANT_ID},
            name="/api/v1/bookings/available-slots",
        )

    @task(1)
    def book_and_pay(self):
        """
        Reserva un horario libre y la paga con la tarjeta de prueba.

        Cada POST lleva un Idempotency-Key único.
        """
        slots = self.client.get(
            "/api/v1/bookings/available-slots",
            params={"serviceId": SERVICE_ID, "providerId": PROVIDER_ID, "date": self.day},
            headers={"X-Tenant-Id": TENANT_ID},
            name="/api/v1/bookings/available-slots",
        ).json().get("availableSlots") or []
        if not slots:
            return

        booking = self.client.post(
            "/api/v1/bookings",
            json={
                "serviceId": SERVICE_ID,
                "providerId": PROVIDER_ID,
                "scheduledAt": f"{self.day}T{random.choice(slots)}:00",
                "customerAddress": "12 King Fahd Road, Riyadh",
                "addons": [REQUIRED_ADDON_ID],
                "paymentType": "instant",
            },
            headers={**self.headers, "Idempotency-Key": str(uuid.uuid4())},
            name="/api/v1/bookings",
        )
        if booking.status_code != 201:
            return
        booking_id = booking.json()["bookingId"]

        payment = self.client.post(
            "/api/v1/payments",
            json={
                "bookingId": booking_id,
                "paymentMethod": "card",
                "paymentGatewayReference": "CARD_4242",
            },
            headers={**self.headers, "Idempotency-Key": str(uuid.uuid4())},
            name="/api/v1/payments",
        )
        if payment.status_code != 201:
            return

        self.client.put(
            f"/api/v1/bookings/{booking_id}/confirm",
            headers=self.headers,
            name="/api/v1/bookings/{id}/confirm",
        )
