"""
Administrative directory over application accounts and lawyer records.

Accounts live in the main database and go through `@transactional`; lawyer
records live in the lawyer database and go through `@lawyer_transactional`.
The two collections are queried independently and never share a session.

Updates take a `changes` dict keyed by entity attribute name, holding only
the fields the caller provided. Fields outside each whitelist are ignored.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from aila_admin.database.core.accounts import (
    MIN_USERNAME_LENGTH,
    account_dao,
    account_profile,
    delete_account_records,
    ensure_available,
)
from aila_admin.database.daos.lawyer_dao import LawyerDao
from aila_admin.database.entities.account import Account
from aila_admin.database.entities.lawyer import Lawyer
from aila_admin.database.helpers.queries import contains_any, page_envelope, paginate, page_window, parse_id, sort_clause
from aila_admin.database.helpers.transactionManagement import lawyer_transactional, transactional
from aila_admin.errors import NotFound, ValidationFailed
from aila_admin.storage.files import remove_upload

logger = logging.getLogger(__name__)

lawyer_dao = LawyerDao()

ACCOUNT_SORT_FIELDS = {
    "createdAt": Account.created_at,
    "fullName": Account.full_name,
    "username": Account.username,
    "email": Account.email,
}
LAWYER_SORT_FIELDS = {
    "createdAt": Lawyer.created_at,
    "name": Lawyer.name,
    "email": Lawyer.email,
    "experienceYears": Lawyer.experience_years,
}
ACCOUNT_EDITABLE = ("full_name", "username", "email", "phone", "is_admin")
LAWYER_EDITABLE = ("name", "email", "phone", "bio", "practice_areas", "office_address", "role")

INVALID_USER_ID = "Invalid user ID format"
INVALID_LAWYER_ID = "Invalid lawyer ID format"


def lawyer_details(lawyer: Lawyer) -> dict:
    """Public representation of a lawyer record; the password hash is never included."""
    return {
        "id": lawyer.id,
        "name": lawyer.name,
        "email": lawyer.email,
        "phone": lawyer.phone,
        "bio": lawyer.bio,
        "practiceAreas": lawyer.practice_areas or [],
        "experienceYears": lawyer.experience_years,
        "officeAddress": lawyer.office_address,
        "languages": lawyer.languages or [],
        "role": lawyer.role,
        "createdAt": lawyer.created_at,
    }


def _as_int(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

@transactional
def list_directory_accounts(
    session: Session,
    page: int = 1,
    limit: int = 20,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    search: str = "",
    role: str = "",
) -> dict:
    """
    List accounts for the admin directory.

    Parameters
    ----------
    search : str
        Case-insensitive substring over full name, username, email and phone.
    role : str
        "admin" or "user" filters on the admin flag; anything else is ignored.

    Raises
    ------
    ValidationFailed
        Unknown sort field or sort order.
    """
    page, limit = page_window(page, limit)
    order = sort_clause(sort_by or "createdAt", sort_order, ACCOUNT_SORT_FIELDS)
    query = account_dao.queryAccounts(session)
    search = (search or "").strip()
    if search:
        query = query.filter(
            contains_any(search, [Account.full_name, Account.username, Account.email, Account.phone])
        )
    role = (role or "").strip().lower()
    if role == "admin":
        query = query.filter(Account.is_admin.is_(True))
    elif role == "user":
        query = query.filter(Account.is_admin.is_(False))

    accounts, total = paginate(query.order_by(order), page, limit)
    return page_envelope([account_profile(a) for a in accounts], page, limit, total)


@transactional
def update_directory_account(session: Session, account_id, changes: dict) -> dict:
    """
    Edit an account on behalf of an admin.

    Username and email are trimmed, lowercased and re-checked for uniqueness
    against every other account.

    Raises
    ------
    ValidationFailed
        Malformed id, blank username/email, or a value already taken.
    NotFound
        No such account.
    """
    account_id = parse_id(account_id, ValidationFailed, INVALID_USER_ID)
    account = account_dao.fetchAccountById(session, account_id)
    if account is None:
        raise NotFound("User not found")

    updates = {k: v for k, v in changes.items() if k in ACCOUNT_EDITABLE and v is not None}
    for key in ("full_name", "username", "email", "phone"):
        if key in updates:
            updates[key] = str(updates[key]).strip()
    for key in ("username", "email"):
        if key in updates:
            updates[key] = updates[key].lower()
            if not updates[key]:
                raise ValidationFailed(f"{key} cannot be empty")
    if "username" in updates and len(updates["username"]) < MIN_USERNAME_LENGTH:
        raise ValidationFailed(f"Username must be at least {MIN_USERNAME_LENGTH} characters")
    if "full_name" in updates and not updates["full_name"]:
        del updates["full_name"]

    if "username" in updates or "email" in updates:
        ensure_available(
            session,
            updates.get("username", account.username),
            updates.get("email", account.email),
            exclude_id=account.id,
        )
    for key, value in updates.items():
        setattr(account, key, value)
    session.flush()
    logger.info("Directory update of account %s: %s", account.id, sorted(updates))
    return account_profile(account)


def delete_directory_account(account_id) -> None:
    """Delete an account together with its conversations, then its photo file."""
    account_id = parse_id(account_id, ValidationFailed, INVALID_USER_ID)
    photo = delete_account_records(account_id=account_id)
    remove_upload(photo)
    logger.info("Directory deletion of account %s", account_id)


# ---------------------------------------------------------------------------
# Lawyers
# ---------------------------------------------------------------------------

@lawyer_transactional
def list_directory_lawyers(
    session: Session,
    page: int = 1,
    limit: int = 20,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    search: str = "",
    role: str = "",
    experience=None,
) -> dict:
    """
    List lawyer records for the admin directory.

    Parameters
    ----------
    search : str
        Case-insensitive substring over name, email, phone, office address and
        practice areas.
    role : str
        Exact role match when given.
    experience : str | int | None
        Minimum years of experience; ignored unless it parses as an integer.
    """
    page, limit = page_window(page, limit)
    order = sort_clause(sort_by or "createdAt", sort_order, LAWYER_SORT_FIELDS)
    query = lawyer_dao.queryLawyers(session)
    search = (search or "").strip()
    if search:
        query = query.filter(
            contains_any(
                search,
                [Lawyer.name, Lawyer.email, Lawyer.phone, Lawyer.office_address, Lawyer.practice_areas],
            )
        )
    role = (role or "").strip()
    if role:
        query = query.filter(Lawyer.role == role)
    min_years = _as_int(experience)
    if min_years is not None:
        query = query.filter(Lawyer.experience_years >= min_years)

    lawyers, total = paginate(query.order_by(order), page, limit)
    return page_envelope([lawyer_details(l) for l in lawyers], page, limit, total)


@lawyer_transactional
def update_directory_lawyer(session: Session, lawyer_id, changes: dict) -> dict:
    lawyer_id = parse_id(lawyer_id, ValidationFailed, INVALID_LAWYER_ID)
    lawyer = lawyer_dao.fetchLawyerById(session, lawyer_id)
    if lawyer is None:
        raise NotFound("Lawyer not found")

    updates = {k: v for k, v in changes.items() if k in LAWYER_EDITABLE and v is not None}
    if "email" in updates:
        updates["email"] = str(updates["email"]).strip().lower()
    if "practice_areas" in updates:
        updates["practice_areas"] = [str(area).strip() for area in updates["practice_areas"] if str(area).strip()]
    for key, value in updates.items():
        setattr(lawyer, key, value)
    session.flush()
    logger.info("Directory update of lawyer %s: %s", lawyer.id, sorted(updates))
    return lawyer_details(lawyer)


@lawyer_transactional
def delete_directory_lawyer(session: Session, lawyer_id) -> None:
    lawyer_id = parse_id(lawyer_id, ValidationFailed, INVALID_LAWYER_ID)
    lawyer = lawyer_dao.fetchLawyerById(session, lawyer_id)
    if lawyer is None:
        raise NotFound("Lawyer not found")
    lawyer_dao.deleteLawyer(session, lawyer)
    logger.info("Directory deletion of lawyer %s", lawyer_id)
