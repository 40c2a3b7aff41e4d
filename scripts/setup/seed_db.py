"""
Bootstrap the fleet platform databases.
Drops and recreates the users + main databases, creates every table and,
with --demo, fills them with a synthetic demo dataset.
Usage: python scripts/setup/seed_db.py [--demo] [--seed 42]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse

from sqlalchemy import create_engine, text
from fleetseed.cli import DEMO, SCHEMA, main as run_seeder
from fleetseed.config import settings


def check_connection() -> bool:
    engine = create_engine(settings.DATABASE_SERVER_URL, pool_pre_ping=True)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        print(f"❌ Cannot connect to database server: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        return False
    finally:
        engine.dispose()


def main():
    parser = argparse.ArgumentParser(description="Create databases and optionally seed demo data")
    parser.add_argument("--demo", action="store_true", help="populate demo data after creating tables")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args()

    print("🗄️  Fleet Platform DB Bootstrap")
    print("=" * 40)
    print(f"📡 Server: {settings.DATABASE_SERVER_URL}")
    print(f"   Databases: {settings.USERS_DB_NAME}, {settings.MAIN_DB_NAME}")

    if not check_connection():
        sys.exit(1)
    print("✅ Database server connection OK")

    argv = [DEMO if args.demo else SCHEMA]
    if args.seed is not None:
        argv += ["--seed", str(args.seed)]
    code = run_seeder(argv)
    print("\n🎉 Databases ready!" if code == 0 else "\n❌ Bootstrap failed, see logs/seeder.log")
    sys.exit(code)


if __name__ == "__main__":
    main()
