from sqlalchemy.orm import Session
from typing import Optional

from app.enums.user_role import UserRole
from app.models.user import User
from app.schemas.user import UserCreate


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session, user: UserCreate, hashed_password: str, role: UserRole = UserRole.USER
) -> User:
    db_user = User(
        name=user.name,
        email=user.email,
        phone=user.phone,
        country_id=user.country_id,
        hashed_password=hashed_password,
        role=role,
        is_active=True,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user
