"""
Initialize database — creates all tables and seeds demo data.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--no-seed]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from decimal import Decimal
from sqlalchemy import inspect, text
from parking_api.database import create_tables, engine, SessionLocal
from parking_api.config import settings
from parking_api.models import User, Role, Parking
from parking_api.security import hash_password

SEED_USERS = [
    {"first_name": "Admin", "last_name": "User", "email": "admin@example.com",
     "password": "admin123", "role": Role.ADMIN},
    {"first_name": "Regular", "last_name": "User", "email": "user@example.com",
     "password": "user123", "role": Role.USER},
]

SEED_PARKINGS = [
    {"code": "P001", "name": "Central Parking", "location": "Downtown",
     "total_spaces": 100, "hourly_fee": Decimal("2.50")},
    {"code": "P002", "name": "North Parking", "location": "North District",
     "total_spaces": 50, "hourly_fee": Decimal("2.00")},
]


def seed(db):
    for u in SEED_USERS:
        if db.query(User).filter(User.email == u["email"]).first():
            print(f"   • user {u['email']} exists")
            continue
        db.add(User(first_name=u["first_name"], last_name=u["last_name"], email=u["email"],
                    password=hash_password(u["password"]), role=u["role"].value))
        print(f"   ✓ user {u['email']} ({u['role'].value})")

    for p in SEED_PARKINGS:
        if db.query(Parking).filter(Parking.code == p["code"]).first():
            print(f"   • parking {p['code']} exists")
            continue
        db.add(Parking(available_spaces=p["total_spaces"], **p))
        print(f"   ✓ parking {p['code']} — {p['name']} ({p['total_spaces']} spaces)")

    db.commit()


def main():
    print("🗄️  Parking DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  sudo systemctl start postgresql")
        sys.exit(1)

    # Create all tables
    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"✅ Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if "--no-seed" not in sys.argv:
        print("\n🌱 Seeding demo data...")
        with SessionLocal() as db:
            seed(db)

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn parking_api.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
