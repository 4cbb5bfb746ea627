from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from blogql.core.config import settings
from blogql.core.exceptions import InvalidTokenError

# CryptContext handles password hashing using bcrypt
# bcrypt generates a random salt per hash and embeds it in the digest
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


class TokenClaims(BaseModel):
    """Signed identity carried by an auth token.

    This is a snapshot taken at login; the database row may have changed since.
    """
    id: int
    name: str
    email: str
    is_admin: bool = Field(alias="isAdmin")

    model_config = ConfigDict(populate_by_name=True)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def claims_for_user(user) -> dict:
    """Build the token payload from a user row"""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "isAdmin": bool(user.is_admin),
    }


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token with expiration"""
    # Copy data to avoid mutating the original dict
    to_encode = data.copy()

    if expires_delta is not None:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(
            timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    # JWT standard 'exp' claim - checked by jwt.decode
    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises InvalidTokenError if the token is expired, tampered with, or signed
    with another key.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY,
                          algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError() from e


def claims_from_token(token: str) -> TokenClaims:
    """Verify a token and validate its payload shape"""
    payload = decode_access_token(token)
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        # Signed by us but not an auth token (missing id/email etc.)
        raise InvalidTokenError("Malformed token claims") from e
