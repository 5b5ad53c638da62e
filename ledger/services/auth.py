"""Authentication: password hashing, JWT access tokens, TOTP second factor."""

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
import pyotp
from sqlmodel import Session, select

from ledger.config import settings
from ledger.models.user import User

logger = logging.getLogger(__name__)


class AuthenticationError(ValueError):
    """Login rejected. The message is safe to return to the client."""


def hash_password(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    pw = password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    pw = plain.encode("utf-8")[:72]
    return bcrypt.checkpw(pw, hashed.encode("utf-8"))


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes
    now = datetime.now(timezone.utc)
    payload = {"sub": subject, "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the token subject (username), or None if invalid or expired."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return payload.get("sub")


def generate_totp_secret() -> str:
    return pyotp.random_base32()


def get_totp_uri(secret: str, username: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(name=username, issuer_name=settings.totp_issuer)


def verify_totp(secret: str, code: str) -> bool:
    return pyotp.TOTP(secret).verify(code, valid_window=1)


def authenticate(session: Session, username: str, password: str, totp_code: str) -> User:
    """Check all three login factors and stamp ``last_login_at``."""
    user = session.exec(select(User).where(User.username == username)).first()
    if not user or not user.is_active:
        raise AuthenticationError("Invalid credentials")
    if not verify_password(password, user.hashed_password):
        raise AuthenticationError("Invalid credentials")
    if not verify_totp(user.totp_secret, totp_code):
        logger.warning(f"Rejected TOTP code for user '{username}'")
        raise AuthenticationError("Invalid TOTP code")

    user.last_login_at = datetime.now(timezone.utc)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
