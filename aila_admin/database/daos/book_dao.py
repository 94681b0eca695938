"""
Book DAO

Data-access layer for the `Book` ORM entity: create, fetch by id, list newest
first, delete. Session lifecycle is owned by the caller.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from aila_admin.database.entities.book import Book

logger = logging.getLogger(__name__)


class BookDao:
    """
    Data Access Object (DAO) for managing Book entities.
    """

    def createBook(self, session: Session, book: Book) -> Book:
        try:
            session.add(book)
            session.flush()
            return book
        except Exception as e:
            logger.error("Error in BookDao.createBook. Error Message: %s", e)
            raise

    def fetchBookById(self, session: Session, book_id: UUID) -> Optional[Book]:
        try:
            return session.get(Book, book_id)
        except Exception as e:
            logger.error("Error in BookDao.fetchBookById. Error Message: %s", e)
            raise

    def fetchBooks(self, session: Session) -> List[Book]:
        """
        Fetch every book, most recently created first.
        """
        try:
            return session.query(Book).order_by(desc(Book.created_at)).all()
        except Exception as e:
            logger.error("Error in BookDao.fetchBooks. Error Message: %s", e)
            raise

    def deleteBook(self, session: Session, book: Book) -> None:
        try:
            session.delete(book)
        except Exception as e:
            logger.error("Error in BookDao.deleteBook. Error Message: %s", e)
            raise
