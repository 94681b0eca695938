"""
Authentication dependencies for the routers.

- `current_identity`: resolves the bearer token to ``{"id", "username", "isAdmin"}``.
- `require_admin`: same, but only for administrators.

Missing, malformed, tampered or expired tokens, and tokens of deleted
accounts, are answered with 401; a valid token without privilege with 403.
"""

from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from aila_admin.api.utils import verify_token
from aila_admin.database.core.accounts import get_identity
from aila_admin.database.helpers.queries import parse_id
from aila_admin.errors import AuthenticationFailed

bearer_scheme = HTTPBearer(auto_error=False)


def current_identity(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Missing token")
    claims = verify_token(credentials.credentials)
    if not claims or not claims.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    account_id = parse_id(claims["sub"], AuthenticationFailed, "Invalid or expired token")
    return get_identity(account_id=account_id)


def require_admin(identity: dict = Depends(current_identity)) -> dict:
    if not identity["isAdmin"]:
        raise HTTPException(status_code=403, detail="Access denied. Admins only.")
    return identity
