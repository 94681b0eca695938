"""
KYC DAO

Data-access layer for `KycSubmission` rows of the lawyer database: fetch by
id, base query for listings. Status changes are applied by the service layer
on the fetched entity.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from aila_admin.database.entities.kyc import KycSubmission

logger = logging.getLogger(__name__)


class KycDao:
    """
    Data Access Object (DAO) for KYC submissions.
    """

    def fetchKycById(self, session: Session, kyc_id: UUID) -> Optional[KycSubmission]:
        try:
            return session.get(KycSubmission, kyc_id)
        except Exception as e:
            logger.error("Error in KycDao.fetchKycById. Error Message: %s", e)
            raise

    def queryKycs(self, session: Session) -> Query:
        return session.query(KycSubmission)
