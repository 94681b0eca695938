"""
Service-layer operations for accounts: registration, authentication and
self-service profile management.

Transactional functions are wrapped with `@transactional`, which injects the
`session` keyword argument; callers pass every other argument by keyword.
Operations that also touch files on disk (`update_self`, `delete_self`) are
plain functions around a transactional core, so that superseded files are
only removed once the database change has been committed.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from aila_admin.crypt.encrypt_decrypt import EncryptionDec, MAX_PASSWORD_BYTES, MIN_PASSWORD_LENGTH
from aila_admin.database.daos.account_dao import AccountDao
from aila_admin.database.daos.conversation_dao import ConversationDao
from aila_admin.database.entities.account import Account
from aila_admin.database.helpers.queries import contains_any, page_envelope, paginate, page_window, parse_id
from aila_admin.database.helpers.transactionManagement import transactional
from aila_admin.errors import AuthenticationFailed, NotFound, PermissionDenied, ValidationFailed
from aila_admin.storage.files import is_image, persist_upload, public_url, remove_upload

logger = logging.getLogger(__name__)

account_dao = AccountDao()
conversation_dao = ConversationDao()
enc = EncryptionDec()

MIN_USERNAME_LENGTH = 3
INVALID_CREDENTIALS = "Invalid credentials"
TAKEN = "Username or Email already taken"


def account_profile(account: Account) -> dict:
    """Public representation of an account; never includes the password hash."""
    return {
        "id": account.id,
        "fullName": account.full_name,
        "username": account.username,
        "email": account.email,
        "isAdmin": account.is_admin,
        "photoUrl": public_url(account.photo_filename),
        "phone": account.phone,
        "address": account.address,
        "createdAt": account.created_at,
    }


def ensure_available(session: Session, username: str, email: str, exclude_id: Optional[UUID] = None) -> None:
    """Raise `ValidationFailed` if another account already holds `username` or `email`."""
    if account_dao.fetchAccountsByUsernameOrEmail(session, username, email, exclude_id=exclude_id):
        raise ValidationFailed(TAKEN)


@transactional
def register_account(
    session: Session,
    full_name: str,
    username: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    address: Optional[str] = None,
) -> dict:
    """
    Validate uniqueness and password policy, then create a new account.

    Returns
    -------
    dict
        The public profile of the new account.

    Raises
    ------
    ValidationFailed
        Missing fields, short username/password, or username/email already taken.
    """
    full_name = (full_name or "").strip()
    username = (username or "").strip().lower()
    email = (email or "").strip().lower()
    if not full_name or not username or not email or not password:
        raise ValidationFailed("All fields are required")
    if len(username) < MIN_USERNAME_LENGTH:
        raise ValidationFailed(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if not enc.is_valid_password(password):
        raise ValidationFailed(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters and at most {MAX_PASSWORD_BYTES} bytes"
        )

    ensure_available(session, username, email)
    account = Account(
        full_name=full_name,
        username=username,
        email=email,
        password=enc.hash_password(password),
        phone=str(phone or ""),
        address=str(address or ""),
    )
    try:
        account_dao.createAccount(session, account)
    except IntegrityError:
        raise ValidationFailed(TAKEN) from None
    logger.info("Registered account %s", account.id)
    return account_profile(account)


@transactional
def authenticate(session: Session, email: str, password: str) -> dict:
    """
    Check an email/password pair.

    Returns
    -------
    dict
        The public profile of the authenticated account.

    Raises
    ------
    AuthenticationFailed
        With the same message whether the email is unknown or the password wrong.
    """
    account = account_dao.fetchAccountByEmail(session, email or "")
    if account is None:
        enc.check_unknown_account(password or "")
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    if not enc.check_passwords(password or "", account.password):
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    return account_profile(account)


@transactional
def get_account_profile(session: Session, account_id: UUID) -> dict:
    account = account_dao.fetchAccountById(session, account_id)
    if account is None:
        raise NotFound("User not found")
    return account_profile(account)


@transactional
def get_identity(session: Session, account_id: UUID) -> dict:
    """
    Resolve the account behind a verified token.

    Raises
    ------
    AuthenticationFailed
        If the account was deleted after the token was issued.
    """
    account = account_dao.fetchAccountById(session, account_id)
    if account is None:
        raise AuthenticationFailed("Account no longer exists")
    return {"id": account.id, "username": account.username, "isAdmin": account.is_admin}


@transactional
def get_account_for(session: Session, requester: dict, target: str) -> dict:
    """
    Read an account as `requester`: allowed for the account itself or an admin.

    Parameters
    ----------
    requester : dict
        Identity returned by `get_identity`.
    target : str
        Account id, or "me".
    """
    target_id = requester["id"] if target == "me" else parse_id(target, NotFound, "User not found")
    if target_id != requester["id"] and not requester["isAdmin"]:
        raise PermissionDenied("Access denied")
    account = account_dao.fetchAccountById(session, target_id)
    if account is None:
        raise NotFound("User not found")
    return account_profile(account)


@transactional
def list_accounts(session: Session, page: int, limit: int, search: str = "") -> dict:
    """
    Paginated account listing, newest first, with case-insensitive search over
    full name, username, email and phone.
    """
    page, limit = page_window(page, limit)
    query = account_dao.queryAccounts(session)
    search = (search or "").strip()
    if search:
        query = query.filter(
            contains_any(search, [Account.full_name, Account.username, Account.email, Account.phone])
        )
    accounts, total = paginate(query.order_by(desc(Account.created_at)), page, limit)
    return page_envelope([account_profile(a) for a in accounts], page, limit, total)


@transactional
def _apply_profile_update(
    session: Session,
    account_id: UUID,
    full_name: Optional[str],
    phone: Optional[str],
    address: Optional[str],
    photo_filename: Optional[str],
):
    account = account_dao.fetchAccountById(session, account_id)
    if account is None:
        raise NotFound("User not found")
    if full_name is not None and full_name.strip():
        account.full_name = full_name.strip()
    if phone is not None:
        account.phone = str(phone).strip()
    if address is not None:
        account.address = str(address).strip()
    previous_photo = None
    if photo_filename:
        previous_photo = account.photo_filename
        account.photo_filename = photo_filename
    return account_profile(account), previous_photo


def update_self(
    account_id: UUID,
    full_name: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    photo: Optional[UploadFile] = None,
) -> dict:
    """
    Update the caller's profile. String fields are trimmed; a blank full name is ignored.

    A new photo is written first and the previous one is removed only after the
    change is committed, so a failure never leaves the account without a photo file.
    """
    new_photo = None
    if photo is not None:
        new_photo = persist_upload(photo, is_image, "photo", prefix="user_", default_ext=".jpg")
    try:
        profile, previous_photo = _apply_profile_update(
            account_id=account_id,
            full_name=full_name,
            phone=phone,
            address=address,
            photo_filename=new_photo,
        )
    except Exception:
        remove_upload(new_photo)
        raise
    remove_upload(previous_photo)
    return profile


@transactional
def delete_account_records(session: Session, account_id: UUID) -> Optional[str]:
    """
    Delete an account and every conversation it owns.

    Returns
    -------
    str | None
        The photo file name, to be removed once the transaction has committed.
    """
    account = account_dao.fetchAccountById(session, account_id)
    if account is None:
        raise NotFound("User not found")
    removed = conversation_dao.deleteConversationsByUserId(session, account.id)
    photo = account.photo_filename
    account_dao.deleteAccount(session, account)
    logger.info("Deleted account %s with %d conversations", account_id, removed)
    return photo


def delete_self(account_id: UUID) -> None:
    photo = delete_account_records(account_id=account_id)
    remove_upload(photo)


@transactional
def grant_admin(session: Session, email: str) -> dict:
    """Give the account registered with `email` administrator rights."""
    account = account_dao.fetchAccountByEmail(session, email or "")
    if account is None:
        raise NotFound("User not found")
    if not account.is_admin:
        account.is_admin = True
        logger.info("Granted admin rights to account %s", account.id)
    return account_profile(account)
