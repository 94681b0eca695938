"""
KYC review workflow over the lawyer database.

Status lifecycle: ``pending`` → ``accepted`` or ``pending`` → ``rejected``.
Repeating the action that produced the current terminal status returns the
submission unchanged; moving from one terminal status to the other raises
`Conflict`.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from aila_admin.database.daos.kyc_dao import KycDao
from aila_admin.database.entities.kyc import KYC_ACCEPTED, KYC_PENDING, KYC_REJECTED, KYC_STATUSES, KycSubmission
from aila_admin.database.helpers.queries import page_envelope, paginate, page_window, parse_id, sort_clause
from aila_admin.database.helpers.transactionManagement import lawyer_transactional
from aila_admin.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

kyc_dao = KycDao()

KYC_SORT_FIELDS = {
    "submittedAt": KycSubmission.submitted_at,
    "createdAt": KycSubmission.created_at,
    "updatedAt": KycSubmission.updated_at,
    "status": KycSubmission.status,
}
KYC_NOT_FOUND = "KYC request not found"


def kyc_details(kyc: KycSubmission) -> dict:
    return {
        "id": kyc.id,
        "lawyerId": kyc.lawyer_id,
        "idDocument": {
            "url": kyc.id_document_url,
            "name": kyc.id_document_name,
            "uploadedAt": kyc.id_document_uploaded_at,
        },
        "licenseDocument": {
            "url": kyc.license_document_url,
            "name": kyc.license_document_name,
            "uploadedAt": kyc.license_document_uploaded_at,
        },
        "status": kyc.status,
        "rejectionReason": kyc.rejection_reason,
        "submittedAt": kyc.submitted_at,
        "createdAt": kyc.created_at,
        "updatedAt": kyc.updated_at,
    }


@lawyer_transactional
def list_kycs(
    session: Session,
    page: int = 1,
    limit: int = 20,
    status: str = "",
    sort_by: str = "submittedAt",
    sort_order: str = "desc",
) -> dict:
    """
    Paginated listing of KYC submissions.

    Raises
    ------
    ValidationFailed
        Unknown status, sort field or sort order.
    """
    page, limit = page_window(page, limit)
    order = sort_clause(sort_by or "submittedAt", sort_order, KYC_SORT_FIELDS)
    query = kyc_dao.queryKycs(session)
    status = (status or "").strip().lower()
    if status:
        if status not in KYC_STATUSES:
            raise ValidationFailed(f"status must be one of: {', '.join(KYC_STATUSES)}")
        query = query.filter(KycSubmission.status == status)

    kycs, total = paginate(query.order_by(order), page, limit)
    return page_envelope([kyc_details(k) for k in kycs], page, limit, total)


def _fetch_kyc(session: Session, kyc_id) -> KycSubmission:
    kyc = kyc_dao.fetchKycById(session, parse_id(kyc_id, NotFound, KYC_NOT_FOUND))
    if kyc is None:
        raise NotFound(KYC_NOT_FOUND)
    return kyc


@lawyer_transactional
def accept_kyc(session: Session, kyc_id) -> dict:
    """
    Move a pending submission to ``accepted``.

    Raises
    ------
    NotFound
        Unknown or malformed id.
    Conflict
        The submission was already rejected.
    """
    kyc = _fetch_kyc(session, kyc_id)
    if kyc.status == KYC_REJECTED:
        raise Conflict("KYC request was already rejected")
    if kyc.status == KYC_PENDING:
        kyc.status = KYC_ACCEPTED
        kyc.updated_at = datetime.now(timezone.utc)
        session.flush()
        logger.info("Accepted KYC %s", kyc.id)
    return kyc_details(kyc)


@lawyer_transactional
def reject_kyc(session: Session, kyc_id, reason: str) -> dict:
    """
    Move a pending submission to ``rejected`` with a reason.

    Parameters
    ----------
    reason : str
        Required; stored trimmed.

    Raises
    ------
    ValidationFailed
        Blank reason.
    NotFound
        Unknown or malformed id.
    Conflict
        The submission was already accepted.
    """
    reason = (reason or "").strip()
    if not reason:
        raise ValidationFailed("Rejection reason is required")
    kyc = _fetch_kyc(session, kyc_id)
    if kyc.status == KYC_ACCEPTED:
        raise Conflict("KYC request was already accepted")
    if kyc.status == KYC_PENDING:
        kyc.status = KYC_REJECTED
        kyc.rejection_reason = reason
        kyc.updated_at = datetime.now(timezone.utc)
        session.flush()
        logger.info("Rejected KYC %s", kyc.id)
    return kyc_details(kyc)
