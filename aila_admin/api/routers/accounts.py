"""
FastAPI Router - Accounts • Sessions
====================================

Purpose
-------
Defines the HTTP API for:
- Registration (`POST /accounts`) and login (`POST /sessions`)
- Self-service profile: read, update (multipart, optional photo), delete
- Account reads: admin listing, single account for its owner or an admin

Key Notes
---------
- Input validation via Pydantic models in `aila_admin.api.models`.
- Auth: `Authorization: Bearer <token>`, resolved by `aila_admin.api.security`.
- Service errors propagate and are rendered by the handlers in `aila_admin.main`.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from aila_admin.api.models import LoginCredentials, RegisterDetails
from aila_admin.api.security import current_identity, require_admin
from aila_admin.api.utils import create_access_token
from aila_admin.database.core.accounts import (
    authenticate,
    delete_self,
    get_account_for,
    get_account_profile,
    list_accounts,
    register_account,
    update_self,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["accounts"])
"""Creates the FastAPI router in which we define its routes"""


@router.post("/accounts", status_code=201)
def register(data: RegisterDetails):
    """Register a new account.

    Returns:
        201: {'message', 'user': {...}}
        400: missing fields, weak password, or username/email already taken.
    """
    user = register_account(
        full_name=data.full_name,
        username=data.username,
        email=data.email,
        password=data.password,
        phone=data.phone,
        address=data.address,
    )
    return {"message": "User created successfully", "user": user}


@router.post("/sessions")
def login(data: LoginCredentials):
    """Authenticate with email and password and issue a bearer token.

    Response:
        200: {'message', 'token', 'tokenType', 'user'}
        401: "Invalid credentials" for unknown email and wrong password alike.
    """
    user = authenticate(email=data.email, password=data.password)
    token = create_access_token({"sub": str(user["id"]), "username": user["username"]})
    logger.info("Account %s logged in", user["id"])
    return {"message": "Login successful", "token": token, "tokenType": "bearer", "user": user}


@router.get("/accounts/me")
def read_self(identity: dict = Depends(current_identity)):
    return {"user": get_account_profile(account_id=identity["id"])}


async def submitted_fields(request: Request) -> set:
    """Names of the form fields present in the request, empty ones included."""
    form = await request.form()
    return set(form.keys())


@router.put("/accounts/me")
def edit_self(
    fullName: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    photo: Optional[UploadFile] = File(None),
    submitted: set = Depends(submitted_fields),
    identity: dict = Depends(current_identity),
):
    """Update the caller's profile (multipart/form-data).

    Only provided fields change; a blank fullName is ignored. An empty phone
    or address clears it. A new photo replaces the previous one, which is
    removed after the change is saved.
    """
    # empty form values arrive as None
    if phone is None and "phone" in submitted:
        phone = ""
    if address is None and "address" in submitted:
        address = ""
    user = update_self(
        account_id=identity["id"],
        full_name=fullName,
        phone=phone,
        address=address,
        photo=photo,
    )
    return {"message": "Profile updated", "user": user}


@router.delete("/accounts/me")
def remove_self(identity: dict = Depends(current_identity)):
    """Delete the caller's account, conversations and photo."""
    delete_self(account_id=identity["id"])
    return {"message": "Account deleted successfully"}


@router.get("/accounts")
def read_accounts(
    page: int = 1,
    limit: int = 20,
    search: str = "",
    identity: dict = Depends(require_admin),
):
    """Paginated account listing for administrators, newest first."""
    return list_accounts(page=page, limit=limit, search=search)


@router.get("/accounts/{account_id}")
def read_account(account_id: str, identity: dict = Depends(current_identity)):
    """Read one account; allowed for the account itself or an admin. `account_id` may be "me"."""
    return {"user": get_account_for(requester=identity, target=account_id)}
