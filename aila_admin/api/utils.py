"""
JWT utilities for issuing and verifying access tokens.

Functions
---------
create_access_token(data: dict) -> str
    Creates a signed JWT access token with an expiration (`exp`) claim.
verify_token(token: str) -> dict | None
    Verify a JWT's signature & expiration and return its claims if valid.

Environment contract (from `settings`)
--------------------------------------
SECRET_KEY : str
    HMAC signing key for JWTs.
ALGORITHM : str
    JWT signing algorithm (e.g., "HS256").
ACCESS_TOKEN_EXPIRE_MINUTES : int
    Token lifetime window in minutes.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError

from aila_admin.database.config.config import settings

logger = logging.getLogger(__name__)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT access token.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. `sub`, `username`).
        Retrieved again by `verify_token`.
    expires_delta : timedelta | None
        Lifetime of the token; defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns
    -------
    str
        Encoded JWT string.

    Notes
    ----------
    - `exp` is a NumericDate (seconds since epoch).
    - Uses `settings.SECRET_KEY` and `settings.ALGORITHM` for signing.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=int(settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    encoding = data.copy()
    expires = int((datetime.now(timezone.utc) + expires_delta).timestamp())
    encoding.update({"exp": expires})
    return jwt.encode(encoding, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """
    Verify a JWT and return its claims.

    Parameters
    ----------
    token : str
        Encoded JWT string from the `Authorization: Bearer` header.

    Returns
    ----------
    dict | None
        The decoded claims if the token is valid, otherwise None.

    Notes
    ----------
    - Decodes and validates the signature and expiration using SECRET_KEY/ALGORITHM.
    - On any JWTError (invalid signature, expired, malformed), returns None.
    """
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        logger.info("Rejected access token: %s", e)
        return None
