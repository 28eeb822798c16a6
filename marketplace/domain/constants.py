"""Constantes del dominio del marketplace."""

# Scopes de idempotencia
IDEMPOTENCY_SCOPE_BOOKING_CREATE = "BOOKING_CREATE"
IDEMPOTENCY_SCOPE_PAYMENT_CREATE = "PAYMENT_CREATE"

# Acciones registradas en audit_logs
AUDIT_ACTION_BOOKING_CREATE = "customer.booking.create"
AUDIT_ACTION_BOOKING_CONFIRM = "booking.confirm"
AUDIT_ACTION_PAYMENT_CREATE = "payment.create"

AUDIT_RESOURCE_BOOKING = "booking"
AUDIT_RESOURCE_PAYMENT = "payment"

# Notificaciones
NOTIFICATION_NEW_BOOKING = "new_booking"

# Roles con acceso a la administración
ADMIN_ROLES = frozenset({"admin", "super_admin"})

# Moneda por defecto del catálogo
DEFAULT_CURRENCY = "SAR"
