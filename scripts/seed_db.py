import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to sys.path
project_root = Path(__file__).resolve().parent.parent
sys.path.append(str(project_root))

from sqlalchemy import insert  # noqa: E402

from marketplace.api.deps import engine  # noqa: E402
from marketplace.infrastructure.db.tables import (  # noqa: E402
    metadata,
    service_addons,
    service_categories,
    service_providers,
    services,
    users,
)

TENANT_ID = "demo-tenant"


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

        await conn.execute(
            insert(users),
            [
                {
                    "id": "demo-customer",
                    "tenant_id": TENANT_ID,
                    "email": "customer@demo.example.com",
                    "first_name": "Sara",
                    "last_name": "Ali",
                    "phone": "0501234567",
                    "address": "12 King Fahd Road, Riyadh",
                    "role": "customer",
                },
                {
                    "id": "demo-provider-user",
                    "tenant_id": TENANT_ID,
                    "email": "provider@demo.example.com",
                    "first_name": "Khalid",
                    "role": "provider",
                },
                {
                    "id": "demo-admin",
                    "tenant_id": TENANT_ID,
                    "email": "admin@demo.example.com",
                    "first_name": "Admin",
                    "role": "admin",
                },
            ],
        )
        await conn.execute(
            insert(service_categories).values(
                id="demo-category-cleaning", tenant_id=TENANT_ID, name="Cleaning", name_ar="تنظيف"
            )
        )
        await conn.execute(
            insert(service_providers).values(
                id="demo-provider",
                tenant_id=TENANT_ID,
                user_id="demo-provider-user",
                business_name="Sparkle Co",
                rating=Decimal("4.80"),
                total_reviews=124,
                commission_rate=Decimal("10.00"),
                is_verified=True,
            )
        )
        await conn.execute(
            insert(services).values(
                id="demo-service-cleaning",
                tenant_id=TENANT_ID,
                provider_id="demo-provider",
                category_id="demo-category-cleaning",
                name="Home Cleaning",
                name_ar="تنظيف المنزل",
                description="Full apartment cleaning",
                base_price=Decimal("150.00"),
                currency="SAR",
                duration_minutes=120,
                is_active=True,
            )
        )
        await conn.execute(
            insert(service_addons),
            [
                {
                    "id": "demo-addon-supplies",
                    "service_id": "demo-service-cleaning",
                    "name": "Cleaning supplies",
                    "price": Decimal("20.00"),
                    "is_required": True,
                },
                {
                    "id": "demo-addon-balcony",
                    "service_id": "demo-service-cleaning",
                    "name": "Balcony",
                    "price": Decimal("35.00"),
                    "is_required": False,
                },
            ],
        )

        print(f"Seeded demo catalog for tenant {TENANT_ID}.")

if __name__ == "__main__":
    asyncio.run(seed())
