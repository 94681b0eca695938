"""
FastAPI Router - Admin directory
================================

Admin-only browsing and editing of application accounts
(`/directory/accounts`) and lawyer records (`/directory/lawyers`).

Listing query parameters: `page`, `limit`, `sortBy`, `sortOrder`, `search`,
`role` and, for lawyers, `experience` (minimum years).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from aila_admin.api.models import AccountDirectoryUpdate, LawyerDirectoryUpdate
from aila_admin.api.security import require_admin
from aila_admin.database.core.directory import (
    delete_directory_account,
    delete_directory_lawyer,
    list_directory_accounts,
    list_directory_lawyers,
    update_directory_account,
    update_directory_lawyer,
)

router = APIRouter(prefix="/directory", tags=["directory"], dependencies=[Depends(require_admin)])


@router.get("/accounts")
def read_accounts(
    page: int = 1,
    limit: int = 20,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    search: str = "",
    role: str = "",
):
    return list_directory_accounts(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        role=role,
    )


@router.put("/accounts/{account_id}")
def edit_account(account_id: str, data: AccountDirectoryUpdate):
    """Apply the fields present in the body; username/email uniqueness is re-checked."""
    user = update_directory_account(account_id=account_id, changes=data.model_dump(exclude_unset=True))
    return {"message": "User updated successfully", "user": user}


@router.delete("/accounts/{account_id}")
def remove_account(account_id: str):
    delete_directory_account(account_id=account_id)
    return {"message": "User deleted successfully", "userId": account_id}


@router.get("/lawyers")
def read_lawyers(
    page: int = 1,
    limit: int = 20,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
    search: str = "",
    role: str = "",
    experience: Optional[str] = None,
):
    return list_directory_lawyers(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        search=search,
        role=role,
        experience=experience,
    )


@router.put("/lawyers/{lawyer_id}")
def edit_lawyer(lawyer_id: str, data: LawyerDirectoryUpdate):
    lawyer = update_directory_lawyer(lawyer_id=lawyer_id, changes=data.model_dump(exclude_unset=True))
    return {"message": "Lawyer updated successfully", "lawyer": lawyer}


@router.delete("/lawyers/{lawyer_id}")
def remove_lawyer(lawyer_id: str):
    delete_directory_lawyer(lawyer_id=lawyer_id)
    return {"message": "Lawyer deleted successfully", "lawyerId": lawyer_id}
