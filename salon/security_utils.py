"""
Password hashing and access-token helpers
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# ACCESS TOKENS
# ============================================================================


def create_access_token(
    user_id: int, role_id: int, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT asserting the user id and role id.

    Args:
        user_id: Authenticated user
        role_id: Role at login time
        expires_delta: Token lifetime (default ACCESS_TOKEN_EXPIRE_MINUTES)
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"user_id": user_id, "role_id": role_id, "exp": expire}
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        AuthenticationError: TOKEN_EXPIRED or INVALID_TOKEN
    """
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise AuthenticationError("Token expired", code="TOKEN_EXPIRED") from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise AuthenticationError("Invalid token", code="INVALID_TOKEN") from e
