"""
FastAPI Router - KYC review
===========================

Admin-only listing and accept/reject transitions of lawyer KYC submissions.
Mounted by `aila_admin.main` only when `KYC_ENABLED` is set.
"""

from fastapi import APIRouter, Depends, Query

from aila_admin.api.models import KycRejection
from aila_admin.api.security import require_admin
from aila_admin.database.core.kyc import accept_kyc, list_kycs, reject_kyc

router = APIRouter(prefix="/kyc", tags=["kyc"], dependencies=[Depends(require_admin)])


@router.get("")
def read_kycs(
    page: int = 1,
    limit: int = 20,
    status: str = "",
    sort_by: str = Query("submittedAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder"),
):
    return list_kycs(page=page, limit=limit, status=status, sort_by=sort_by, sort_order=sort_order)


@router.put("/{kyc_id}/accept")
def accept(kyc_id: str):
    kyc = accept_kyc(kyc_id=kyc_id)
    return {"success": True, "message": "KYC accepted successfully", "data": {"kyc": kyc}}


@router.put("/{kyc_id}/reject")
def reject(kyc_id: str, data: KycRejection):
    kyc = reject_kyc(kyc_id=kyc_id, reason=data.reason)
    return {"success": True, "message": "KYC rejected successfully", "data": {"kyc": kyc}}
