"""
Account DAO

Purpose
-------
Thin data-access layer for the `Account` ORM entity. Provides:
- Creation
- Lookup by id, username or email (lowercase comparison)
- Filtered queries for the listing services
- Deletion

Design
------
- The DAO expects an active SQLAlchemy `Session` supplied by the caller; the
  `@transactional` service functions own commit and rollback.
- Passwords arrive already hashed (see `aila_admin.crypt`).

Error Handling
--------------
- Each method logs the failure with its name and re-raises.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from aila_admin.database.entities.account import Account

logger = logging.getLogger(__name__)


class AccountDao:
    """
    Data Access Object (DAO) for managing Account entities.
    """

    def createAccount(self, session: Session, account: Account) -> Account:
        try:
            session.add(account)
            session.flush()
            return account
        except Exception as e:
            logger.error("Error in AccountDao.createAccount. Error Message: %s", e)
            raise

    def fetchAccountById(self, session: Session, account_id: UUID) -> Optional[Account]:
        """
        Fetch an account by primary key.

        Returns
        -------
        Account | None
            The account, or None if it does not exist.
        """
        try:
            return session.get(Account, account_id)
        except Exception as e:
            logger.error("Error in AccountDao.fetchAccountById. Error Message: %s", e)
            raise

    def fetchAccountByEmail(self, session: Session, email: str) -> Optional[Account]:
        try:
            return (
                session.query(Account)
                .filter(Account.email == email.strip().lower())
                .one_or_none()
            )
        except Exception as e:
            logger.error("Error in AccountDao.fetchAccountByEmail. Error Message: %s", e)
            raise

    def fetchAccountsByUsernameOrEmail(
        self, session: Session, username: str, email: str, exclude_id: Optional[UUID] = None
    ) -> List[Account]:
        """
        Fetch accounts already holding `username` or `email`.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        username : str
            Username to look for (compared lowercase).
        email : str
            Email to look for (compared lowercase).
        exclude_id : UUID | None
            Account to ignore, used when an account is re-checked against itself on update.

        Returns
        -------
        list[Account]
            Conflicting accounts (empty when both values are free).
        """
        try:
            query = session.query(Account).filter(
                or_(
                    Account.username == username.strip().lower(),
                    Account.email == email.strip().lower(),
                )
            )
            if exclude_id is not None:
                query = query.filter(Account.id != exclude_id)
            return query.all()
        except Exception as e:
            logger.error("Error in AccountDao.fetchAccountsByUsernameOrEmail. Error Message: %s", e)
            raise

    def queryAccounts(self, session: Session) -> Query:
        """Base query for listings; callers add filters, ordering and paging."""
        return session.query(Account)

    def deleteAccount(self, session: Session, account: Account) -> None:
        try:
            session.delete(account)
        except Exception as e:
            logger.error("Error in AccountDao.deleteAccount. Error Message: %s", e)
            raise
