"""
Lawyer DAO

Data-access layer for the externally owned `Lawyer` records of the lawyer
database. There is no create method: the records are written by the
lawyer-facing application.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Query, Session

from aila_admin.database.entities.lawyer import Lawyer

logger = logging.getLogger(__name__)


class LawyerDao:
    """
    Data Access Object (DAO) for Lawyer directory records.
    """

    def fetchLawyerById(self, session: Session, lawyer_id: UUID) -> Optional[Lawyer]:
        try:
            return session.get(Lawyer, lawyer_id)
        except Exception as e:
            logger.error("Error in LawyerDao.fetchLawyerById. Error Message: %s", e)
            raise

    def queryLawyers(self, session: Session) -> Query:
        """Base query for listings; callers add filters, ordering and paging."""
        return session.query(Lawyer)

    def deleteLawyer(self, session: Session, lawyer: Lawyer) -> None:
        try:
            session.delete(lawyer)
        except Exception as e:
            logger.error("Error in LawyerDao.deleteLawyer. Error Message: %s", e)
            raise
