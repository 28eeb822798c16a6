from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False, index=True),
    Column("email", String(255), nullable=False),
    Column("first_name", String(150), nullable=False),
    Column("last_name", String(150)),
    Column("phone", String(50)),
    Column("address", Text),
    Column("role", String(32), nullable=False, default="customer"),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    UniqueConstraint("tenant_id", "email", name="uq_users_tenant_email"),
)

service_providers = Table(
    "service_providers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False, index=True),
    Column("user_id", String(36), nullable=False),
    Column("business_name", String(255), nullable=False),
    Column("business_name_ar", String(255)),
    Column("description", Text),
    Column("rating", Numeric(3, 2), nullable=False, default=0),
    Column("total_reviews", Integer, nullable=False, default=0),
    Column("commission_rate", Numeric(5, 2), nullable=False, default=0),
    Column("is_verified", Boolean, nullable=False, default=False),
)

service_categories = Table(
    "service_categories",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False, index=True),
    Column("name", String(150), nullable=False),
    Column("name_ar", String(150)),
)

services = Table(
    "services",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False, index=True),
    Column("provider_id", String(36), nullable=False, index=True),
    Column("category_id", String(36)),
    Column("name", String(255), nullable=False),
    Column("name_ar", String(255)),
    Column("description", Text),
    Column("description_ar", Text),
    Column("base_price", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False, default="SAR"),
    Column("duration_minutes", Integer),
    Column("is_active", Boolean, nullable=False, default=True),
)

service_addons = Table(
    "service_addons",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("service_id", String(36), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("name_ar", String(255)),
    Column("description", Text),
    Column("price", Numeric(12, 2), nullable=False),
    Column("is_required", Boolean, nullable=False, default=False),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False),
    Column("customer_id", String(36), nullable=False),
    Column("provider_id", String(36), nullable=False),
    Column("service_id", String(36), nullable=False),
    Column("scheduled_at", DateTime, nullable=False),
    Column("duration_minutes", Integer, nullable=False),
    Column("status", String(32), nullable=False),
    Column("payment_status", String(32), nullable=False),
    Column("payment_type", String(32), nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("commission_amount", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("customer_address", Text, nullable=False),
    Column("notes", Text),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    Index("ix_bookings_provider_schedule", "provider_id", "scheduled_at"),
    Index("ix_bookings_tenant_customer", "tenant_id", "customer_id"),
)

booking_addons = Table(
    "booking_addons",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("booking_id", String(36), nullable=False, index=True),
    Column("addon_id", String(36), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
)

payments = Table(
    "payments",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False),
    Column("booking_id", String(36), nullable=False, index=True),
    Column("customer_id", String(36), nullable=False),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False),
    Column("payment_method", String(32), nullable=False),
    Column("status", String(32), nullable=False),
    Column("transaction_ref", String(64), nullable=False),
    Column("payment_gateway_reference", String(100)),
    Column("created_at", DateTime),
)

audit_logs = Table(
    "audit_logs",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False),
    Column("user_id", String(36)),
    Column("action", String(100), nullable=False),
    Column("resource_type", String(50), nullable=False),
    Column("resource_id", String(100)),
    Column("changes", JSON),
    Column("ip_address", String(45)),
    Column("user_agent", String(500)),
    Column("created_at", DateTime, nullable=False),
    Index("ix_audit_logs_tenant_created", "tenant_id", "created_at"),
)

notifications = Table(
    "notifications",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("tenant_id", String(36), nullable=False),
    Column("user_id", String(36), nullable=False, index=True),
    Column("type", String(50), nullable=False),
    Column("title", String(255), nullable=False),
    Column("message", Text, nullable=False),
    Column("data", JSON),
    Column("is_read", Boolean, nullable=False, default=False),
    Column("created_at", DateTime),
)

idempotency_keys = Table(
    "idempotency_keys",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", String(32), nullable=False),
    Column("idem_key", String(128), nullable=False),
    Column("request_hash", String(64), nullable=False),
    Column("response_json", JSON),
    Column("http_status", Integer),
    Column("tenant_id", String(36)),
    Column("reference_booking_id", String(36)),
    UniqueConstraint("scope", "idem_key", name="uq_idempotency_scope_key"),
)
