"""
Database management for Badminton Squad.

Creates the tables, checks that they exist and promotes the first super
admin, who can then approve everyone else through the admin API.

    python -m badminton_squad.manage_db
    python -m badminton_squad.manage_db --promote admin@example.com
"""

import argparse
import logging
from sqlalchemy import inspect
from sqlalchemy.orm import Session
from .database import engine, session_scope, init_db, Base
from .models.profile import Profile
from .models.enums import UserRole

logger = logging.getLogger(__name__)


def verify_tables(target_engine=engine) -> bool:
    """Check that every mapped table exists in the database"""
    existing = set(inspect(target_engine).get_table_names())
    missing = sorted(set(Base.metadata.tables.keys()) - existing)

    if missing:
        logger.error(f"Missing tables: {missing}")
        return False

    logger.info(f"All {len(existing)} tables present")
    return True


def promote_super_admin(db: Session, email: str) -> Profile:
    """Give an existing profile the super_admin role and approve it"""
    profile = db.query(Profile).filter(Profile.email == email).first()
    if not profile:
        raise ValueError(f"No profile registered with email {email}")

    try:
        profile.role = UserRole.SUPER_ADMIN.value
        profile.approved = True
        db.commit()
        db.refresh(profile)
    except Exception:
        db.rollback()
        raise

    logger.info(f"{email} is now a super admin")
    return profile


def main():
    parser = argparse.ArgumentParser(description="Badminton Squad database setup")
    parser.add_argument(
        "--promote", metavar="EMAIL", help="Promote this profile to super admin"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    init_db()
    if not verify_tables():
        raise SystemExit("Database setup verification failed")

    if args.promote:
        with session_scope() as db:
            promote_super_admin(db, args.promote)


if __name__ == "__main__":
    main()
