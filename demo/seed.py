"""Demo data seeding script for ProjektMester.

Creates:
- 2 users (admin@projektmester.hu / admin, user@projektmester.hu / user123)
- 1 renovation project assigned to both, with tasks, materials and costs
"""

import sys
from pathlib import Path

# Add server to path
sys.path.insert(0, str(Path(__file__).parent.parent / "server"))

from projektmester.database import SessionLocal, engine, Base
from projektmester.demo import seed_demo_data
from projektmester.records import RecordStore
from projektmester.services.project_data_service import ProjectDataService


def seed_database():
    """Seed the database with demo data."""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = seed_demo_data(ProjectDataService(RecordStore(db)))
        print("\n=== Demo data ===")
        for kind, count in created.items():
            print(f"  {kind}: {count} created")
        print("\nLog in as admin@projektmester.hu / admin or user@projektmester.hu / user123")
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
