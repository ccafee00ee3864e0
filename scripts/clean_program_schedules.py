"""Delete every program schedule and training material.

Usage:
  python scripts/clean_program_schedules.py           # dry-run
  python scripts/clean_program_schedules.py --apply   # delete
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse

from playpulse.config import settings
from playpulse.database import Database
from playpulse.models.material import TrainingMaterial
from playpulse.models.schedule import ProgramSchedule


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--apply", action="store_true", help="Actually delete rows (default is dry-run)")
    args = parser.parse_args()

    database = Database(settings.DATABASE_URL)
    db = database.SessionLocal()
    try:
        schedules = db.query(ProgramSchedule).count()
        materials = db.query(TrainingMaterial).count()
        print(f"program schedules: {schedules}")
        print(f"training materials: {materials}")
        if not args.apply:
            print("Dry-run only. Re-run with --apply to delete.")
            return 0

        db.query(ProgramSchedule).delete(synchronize_session=False)
        db.query(TrainingMaterial).delete(synchronize_session=False)
        db.commit()
        print("Deleted all program schedules and training materials.")
        return 0
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


if __name__ == "__main__":
    raise SystemExit(main())
