from sqlalchemy.orm import Session
from app.enums.user_role import UserRole
from app.models.user import User
from app.services.auth import get_password_hash
from dotenv import load_dotenv
import logging
import os

load_dotenv()

logger = logging.getLogger(__name__)


def create_initial_admin(db: Session):
    """
    Creates the initial admin account when the users table is empty.
    """
    if db.query(User).count() > 0:
        logger.info("Users already exist, skipping initial admin.")
        return None

    email = os.getenv("INITIAL_ADMIN_EMAIL", "admin@sportify.local")
    password = os.getenv("INITIAL_ADMIN_PASSWORD")
    if not password:
        logger.warning("INITIAL_ADMIN_PASSWORD not set, skipping initial admin.")
        return None

    admin = User(
        name="admin",
        email=email,
        phone=None,
        hashed_password=get_password_hash(password),
        role=UserRole.ADMIN,
        is_active=True,
    )
    db.add(admin)
    db.commit()
    logger.info(f"Admin created: {email}")
    return admin
