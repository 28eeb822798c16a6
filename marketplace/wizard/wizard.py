"""
Wizard de reserva en cinco pasos.

Flujo:
1. Detalles del servicio y datos del cliente (fecha, horario, add-ons, contacto)
2. Tipo de pago: ``cash_on_delivery`` crea la reserva y salta a 5; ``instant`` sigue a 3
3. Revisión (sin validación)
4. Pago con tarjeta: crea la reserva si aún no existe, registra el pago y confirma
   (un pago pendiente del procesador pasa a 5 sin confirmar)
5. Confirmación (terminal)

Cada ``next()`` revalida el paso actual; si falla, los errores quedan en
``errors`` (por campo) y no se hace ninguna llamada de red. Las fallas remotas
se reducen a un único mensaje en ``error``.
"""

import logging
import uuid
from decimal import Decimal
from urllib.parse import quote

from marketplace.application.interfaces.clock import Clock, SystemClock
from marketplace.config import get_settings
from marketplace.domain.entities.booking import BookingPaymentStatus, PaymentType
from marketplace.domain.entities.payment import PaymentMethod, PaymentStatus
from marketplace.domain.entities.service import ServiceAddon
from marketplace.domain.pricing import calculate_total
from marketplace.wizard.client import ApiError, MarketplaceClient
from marketplace.wizard.state import (
    PROFILE_FIELDS,
    BookingDraft,
    ConfirmationSummary,
    PaymentDraft,
    ReviewSummary,
    ServiceView,
    WizardStep,
    addon_from_payload,
)
from marketplace.wizard.storage import PendingBookingStore
from marketplace.wizard.validation import validate_step, validate_submission

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = PROFILE_FIELDS + ("notes",)
PAYMENT_FIELDS = ("card_number", "card_name", "expiry_date", "cvv")


class ReadOnlyFieldError(Exception):
    """El campo fue rellenado desde el perfil y no se puede editar."""

    def __init__(self, field_name: str):
        super().__init__(f"Field '{field_name}' is read-only")
        self.field_name = field_name


class BookingWizard:
    def __init__(
        self,
        service_id: str,
        client: MarketplaceClient,
        pending_store: PendingBookingStore,
        current_url: str,
        login_path: str | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.client = client
        self.pending_store = pending_store
        self.current_url = current_url
        self.login_path = login_path or get_settings().login_path
        self.clock = clock or SystemClock()

        self.step = WizardStep.SERVICE_DETAILS
        self.service: ServiceView | None = None
        self.addons: list[ServiceAddon] = []
        self.selected_addons: list[str] = []
        self.draft = BookingDraft(service_id=service_id)
        self.payment = PaymentDraft()

        self.loading = False
        self.submitting = False
        self.error: str | None = None
        self.errors: dict[str, str] = {}

        self.profile_filled = False
        self.read_only_fields: set[str] = set()

        self.available_slots: list[str] = []
        self.loading_slots = False
        self._slot_request_seq = 0

        self.booking_id: str | None = None
        # El pago quedó registrado; en modo production sigue pendiente del procesador
        self.payment_completed = False
        self.awaiting_processor = False
        self.redirect_to: str | None = None

        # Una clave por intento lógico: un reintento tras un timeout repite la
        # respuesta original en lugar de crear un duplicado.
        self._booking_idem_key = str(uuid.uuid4())
        self._booking_payload_sent: dict | None = None
        self._payment_idem_key = str(uuid.uuid4())

    # Montaje

    async def mount(self) -> str | None:
        """
        Entrada al paso 1.

        Retorna la URL de login cuando el visitante no tiene sesión; en ese
        caso no se hace ninguna llamada de red.
        """
        if not self.client.is_authenticated:
            self.pending_store.save(
                {
                    "serviceId": self.draft.service_id,
                    "timestamp": self.clock.now_ms(),
                    "url": self.current_url,
                }
            )
            # La URL completa viaja como un único parámetro
            return_url = quote(self.current_url, safe="!~*'()")
            self.redirect_to = f"{self.login_path}?redirect={return_url}"
            return self.redirect_to

        marker = self.pending_store.pop()
        if marker:
            logger.info("Cleared pending booking marker", extra={"service_id": marker.get("serviceId")})

        await self._load_service()
        await self._load_profile()
        return None

    async def _load_service(self) -> None:
        self.loading = True
        self.error = None
        try:
            data = await self.client.get_service(self.draft.service_id)
            service = ServiceView.from_payload(data["service"])
            addons = [addon_from_payload(service.id, item) for item in data.get("addons") or []]
        except ApiError as exc:
            self.error = exc.message
            return
        finally:
            self.loading = False

        self.service = service
        self.addons = addons
        self.selected_addons = [addon.id for addon in addons if addon.is_required]
        self.draft.provider_id = service.provider_id

    async def _load_profile(self) -> None:
        try:
            user = await self.client.get_profile()
        except ApiError:
            # El formulario queda editable
            return

        values = {
            "customer_name": f"{user.get('firstName') or ''} {user.get('lastName') or ''}".strip(),
            "customer_email": user.get("email") or "",
            "customer_phone": user.get("phone") or "",
            "customer_address": user.get("address") or "",
        }
        for field_name, value in values.items():
            setattr(self.draft, field_name, value)
            if value:
                self.read_only_fields.add(field_name)
        self.profile_filled = True

    # Paso 1

    async def select_date(self, day: str) -> None:
        self.draft.scheduled_date = day
        if self.service and day:
            await self._fetch_slots(day)

    async def _fetch_slots(self, day: str) -> None:
        self._slot_request_seq += 1
        seq = self._slot_request_seq
        self.loading_slots = True
        try:
            slots = await self.client.get_available_slots(
                self.service.id,
                self.draft.provider_id,
                day,
            )
        except ApiError:
            slots = []

        if seq != self._slot_request_seq:
            logger.debug("Discarding stale slot response", extra={"date": day, "seq": seq})
            return
        self.available_slots = slots
        self.loading_slots = False

    def select_time(self, time_slot: str) -> None:
        self.draft.scheduled_time = time_slot

    def toggle_addon(self, addon_id: str) -> None:
        addon = next((item for item in self.addons if item.id == addon_id), None)
        if addon is None or addon.is_required:
            return
        if addon_id in self.selected_addons:
            self.selected_addons.remove(addon_id)
        else:
            self.selected_addons.append(addon_id)

    def update_customer(self, **changes: str) -> None:
        for field_name, value in changes.items():
            if field_name not in CUSTOMER_FIELDS:
                raise ValueError(f"Unknown customer field: {field_name}")
            if field_name in self.read_only_fields:
                raise ReadOnlyFieldError(field_name)
            setattr(self.draft, field_name, value)

    # Pasos 2 y 4

    def choose_payment_type(self, payment_type: PaymentType | str | None) -> None:
        self.draft.payment_type = PaymentType(payment_type) if payment_type else None

    def update_payment(self, **changes: str) -> None:
        for field_name, value in changes.items():
            if field_name not in PAYMENT_FIELDS:
                raise ValueError(f"Unknown payment field: {field_name}")
            setattr(self.payment, field_name, value)

    # Navegación

    def validate_current_step(self) -> bool:
        result = validate_step(
            self.step,
            self.draft,
            self.payment,
            self.available_slots,
            self.profile_filled,
        )
        self.errors = result.errors
        return result.ok

    async def next(self) -> bool:
        """Intenta avanzar; retorna True si el paso cambió."""
        if self.submitting or self.step == WizardStep.CONFIRMATION:
            return False
        if not self.validate_current_step():
            return False

        if self.step == WizardStep.SERVICE_DETAILS:
            self.step = WizardStep.PAYMENT_TYPE
            return True

        if self.step == WizardStep.PAYMENT_TYPE:
            if self.draft.payment_type == PaymentType.CASH_ON_DELIVERY:
                self.submitting = True
                try:
                    created = await self._create_booking()
                finally:
                    self.submitting = False
                if not created:
                    return False
                self.step = WizardStep.CONFIRMATION
                return True
            self.step = WizardStep.REVIEW
            return True

        if self.step == WizardStep.REVIEW:
            self.step = WizardStep.PAYMENT
            return True

        self.submitting = True
        try:
            return await self._pay_and_confirm()
        finally:
            self.submitting = False

    def back(self) -> bool:
        if self.submitting or self.step not in (WizardStep.PAYMENT_TYPE, WizardStep.REVIEW):
            return False
        self.step = WizardStep(self.step - 1)
        return True

    # Orquestación

    async def _create_booking(self) -> bool:
        if self.booking_id:
            return True
        self.error = None

        check = validate_submission(self.draft, self.total_amount if self.service else None)
        if not check.ok:
            self.error = check.first_error
            return False

        payload = {
            "serviceId": self.draft.service_id,
            "providerId": self.draft.provider_id,
            "scheduledAt": self.draft.scheduled_at,
            "customerAddress": self.draft.customer_address,
            "notes": self.draft.notes,
            "addons": list(self.selected_addons),
            "paymentType": self.draft.payment_type.value,
        }
        # Otro payload es otro intento: la clave anterior daría 409 en el servidor
        if self._booking_payload_sent is not None and payload != self._booking_payload_sent:
            self._booking_idem_key = str(uuid.uuid4())
        self._booking_payload_sent = payload
        try:
            body = await self.client.create_booking(payload, idem_key=self._booking_idem_key)
        except ApiError as exc:
            self.error = exc.message
            return False

        self.booking_id = body.get("bookingId")
        logger.info("Booking created from wizard", extra={"booking_id": self.booking_id})
        return True

    async def _pay_and_confirm(self) -> bool:
        # Un reintento solo repite los pasos que no se completaron
        if not await self._create_booking():
            return False

        if not self.payment_completed:
            self.error = None
            try:
                body = await self.client.create_payment(
                    {
                        "bookingId": self.booking_id,
                        "paymentMethod": PaymentMethod.CARD.value,
                        "paymentGatewayReference": self.payment.masked_reference,
                    },
                    idem_key=self._payment_idem_key,
                )
            except ApiError as exc:
                self.error = exc.message
                return False
            self.payment_completed = True
            self.awaiting_processor = body.get("status") == PaymentStatus.PENDING.value

        # Sin cobro completado el servidor rechaza la confirmación; la reserva
        # queda pendiente hasta que el procesador liquide el pago.
        if self.awaiting_processor:
            logger.info(
                "Payment awaiting processor, confirmation deferred",
                extra={"booking_id": self.booking_id},
            )
            self.step = WizardStep.CONFIRMATION
            return True

        self.error = None
        try:
            await self.client.confirm_booking(self.booking_id)
        except ApiError as exc:
            self.error = exc.message
            return False

        self.step = WizardStep.CONFIRMATION
        return True

    # Valores derivados

    @property
    def total_amount(self) -> Decimal:
        if not self.service:
            return Decimal("0")
        return calculate_total(
            self.service.price,
            self.addons,
            self.selected_addons,
            self.service.currency,
        ).amount

    @property
    def payment_status(self) -> str:
        if self.draft.payment_type == PaymentType.INSTANT and not self.awaiting_processor:
            return BookingPaymentStatus.PAID.value
        return BookingPaymentStatus.PENDING.value

    def review_summary(self) -> ReviewSummary:
        if not self.service:
            raise RuntimeError("Service not loaded")
        return ReviewSummary(
            service_name=self.service.name,
            provider_name=self.service.provider_name,
            scheduled_date=self.draft.scheduled_date,
            scheduled_time=self.draft.scheduled_time,
            customer_name=self.draft.customer_name,
            customer_email=self.draft.customer_email,
            customer_phone=self.draft.customer_phone,
            customer_address=self.draft.customer_address,
            addons=[addon for addon in self.addons if addon.id in self.selected_addons],
            total_amount=float(self.total_amount),
            currency=self.service.currency,
        )

    def confirmation_summary(self) -> ConfirmationSummary:
        if not self.service or not self.booking_id:
            raise RuntimeError("Booking not created")
        return ConfirmationSummary(
            booking_id=self.booking_id,
            provider_name=self.service.provider_name,
            service_name=self.service.name,
            scheduled_date=self.draft.scheduled_date,
            scheduled_time=self.draft.scheduled_time,
            total_amount=float(self.total_amount),
            currency=self.service.currency,
            payment_type=self.draft.payment_type.value,
            payment_status=self.payment_status,
        )
