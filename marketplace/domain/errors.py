"""Excepciones de dominio para el marketplace de servicios."""


class DomainError(Exception):
    """
    Clase base para todos los errores de dominio.

    ``http_status`` es el código con el que la capa API responde al cliente.
    """

    http_status: int = 400

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Tenant / Acceso ===


class InvalidTenantError(DomainError):
    """La petición no trae un tenant válido."""

    def __init__(self) -> None:
        super().__init__(message="Invalid tenant", code="INVALID_TENANT")


# === Errores de Catálogo ===


class ServiceNotFoundError(DomainError):
    """El servicio no existe, no está activo o pertenece a otro tenant."""

    http_status = 404

    def __init__(self, service_id: str, message: str = "Service not found"):
        super().__init__(message=message, code="SERVICE_NOT_FOUND")
        self.service_id = service_id


class RequiredAddonMissingError(DomainError):
    """La selección omite uno o más add-ons obligatorios."""

    def __init__(self, addon_ids: list[str]):
        super().__init__(
            message=f"Required add-ons missing: {', '.join(addon_ids)}",
            code="REQUIRED_ADDON_MISSING",
        )
        self.addon_ids = addon_ids


# === Errores de Reserva ===


class BookingNotFoundError(DomainError):
    http_status = 404

    def __init__(self, booking_id: str):
        super().__init__(message="Booking not found", code="BOOKING_NOT_FOUND")
        self.booking_id = booking_id


class SlotUnavailableError(DomainError):
    """El horario elegido se traslapa con otra reserva del proveedor."""

    http_status = 409

    def __init__(self, scheduled_at: str):
        super().__init__(
            message="Selected time slot is not available",
            code="SLOT_UNAVAILABLE",
        )
        self.scheduled_at = scheduled_at


class InvalidBookingStatusError(DomainError):
    """El estado de la reserva no permite la operación."""

    def __init__(self, booking_id: str, current_status: str, operation: str):
        super().__init__(
            message=f"Cannot {operation} a booking with status '{current_status}'",
            code="INVALID_BOOKING_STATUS",
        )
        self.booking_id = booking_id
        self.current_status = current_status
        self.operation = operation


class PaymentNotCompletedError(DomainError):
    """Una reserva de pago inmediato no puede confirmarse sin pago."""

    def __init__(self, booking_id: str):
        super().__init__(message="Payment not completed", code="PAYMENT_NOT_COMPLETED")
        self.booking_id = booking_id


# === Errores de Pago ===


class DuplicatePaymentError(DomainError):
    """La reserva ya tiene un pago pendiente o completado."""

    http_status = 409

    def __init__(self, booking_id: str):
        super().__init__(
            message="Payment already exists for this booking",
            code="DUPLICATE_PAYMENT",
        )
        self.booking_id = booking_id


class AmountMismatchError(DomainError):
    def __init__(self, expected: str, received: str):
        super().__init__(
            message=f"Payment amount {received} does not match booking total {expected}",
            code="AMOUNT_MISMATCH",
        )
        self.expected = expected
        self.received = received


class PaymentDeclinedError(DomainError):
    """La pasarela rechazó el cargo."""

    http_status = 402

    def __init__(self, booking_id: str, reason: str = "Payment declined"):
        super().__init__(message=reason, code="PAYMENT_DECLINED")
        self.booking_id = booking_id


# === Errores de Usuario ===


class UserNotFoundError(DomainError):
    http_status = 404

    def __init__(self, user_id: str):
        super().__init__(message="User not found", code="USER_NOT_FOUND")
        self.user_id = user_id


# === Errores de Auditoría ===


class AuditLogNotFoundError(DomainError):
    http_status = 404

    def __init__(self, audit_log_id: str):
        super().__init__(message="Audit log not found", code="AUDIT_LOG_NOT_FOUND")
        self.audit_log_id = audit_log_id


# === Errores de Idempotencia ===


class IdempotencyConflictError(DomainError):
    """Conflicto de idempotencia: mismo key pero diferente request."""

    http_status = 409

    def __init__(self, idem_key: str, scope: str):
        super().__init__(
            message="Idempotency conflict: different payload for same key",
            code="IDEMPOTENCY_CONFLICT",
        )
        self.idem_key = idem_key
        self.scope = scope


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.field = field
