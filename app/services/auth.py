from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.database import get_db
from app.crud.user import get_user_by_email
from app.enums.user_role import UserRole
from app.models.user import User
import logging
import os
from dotenv import load_dotenv
import warnings

# Suppress the bcrypt warning
warnings.filterwarnings("ignore", ".*bcrypt version.*")
warnings.filterwarnings("ignore", ".*trapped.*error reading bcrypt version.*")

load_dotenv()

logger = logging.getLogger(__name__)

# Security configuration
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")
)  # 24 hours by default
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=12)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def _encode_token(data: dict, token_type: str, lifetime: timedelta) -> str:
    claims = dict(data, type=token_type, exp=datetime.utcnow() + lifetime)
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str, token_type: str) -> Optional[str]:
    """
    Returns the subject (user email) of a valid token of the given type.
    Expired, tampered or wrong-type tokens give None.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if payload.get("type") != token_type:
        return None
    return payload.get("sub") or None


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    lifetime = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode_token(data, ACCESS_TOKEN, lifetime)


def create_refresh_token(data: dict) -> str:
    """Long-lived token used to obtain a new access token without logging in."""
    return _encode_token(data, REFRESH_TOKEN, timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def get_user_from_refresh_token(refresh_token: str, db: Session) -> Optional[User]:
    email = decode_token(refresh_token, REFRESH_TOKEN)
    if email is None:
        return None
    return get_user_by_email(db, email=email)


def authenticate_user(db: Session, email: str, password: str):
    user = get_user_by_email(db, email)
    if not user:
        logger.info(f"Login failed: no user with email {email}")
        return False

    if not user.is_active:
        logger.info(f"Login failed: user {user.id} is inactive")
        return False

    if not user.hashed_password or not verify_password(password, user.hashed_password):
        logger.info(f"Login failed: wrong password for user {user.id}")
        return False

    return user


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    email = decode_token(token, ACCESS_TOKEN)
    user = get_user_by_email(db, email=email) if email else None

    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(status_code=403, detail="Admin privileges required")
    return current_user
