"""
Service-layer operations for the book catalog.

Every book has a PDF and optionally a poster, stored on disk under generated
names. File handling follows one rule: new files are written before the
database changes and superseded files are removed only after the commit. A
failed database write removes the files it had just written, and a failed
removal is logged and ignored.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.orm import Session

from aila_admin.database.daos.book_dao import BookDao
from aila_admin.database.entities.book import Book
from aila_admin.database.helpers.queries import parse_id
from aila_admin.database.helpers.transactionManagement import transactional
from aila_admin.errors import NotFound, ValidationFailed
from aila_admin.storage.files import is_image, is_pdf, persist_upload, public_url, remove_upload

logger = logging.getLogger(__name__)

book_dao = BookDao()

BOOK_NOT_FOUND = "Not found"


def book_details(book: Book) -> dict:
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "description": book.description,
        "pdfFilename": book.pdf_filename,
        "pdfUrl": public_url(book.pdf_filename),
        "posterFilename": book.poster_filename,
        "posterUrl": public_url(book.poster_filename),
        "createdAt": book.created_at,
    }


def _book_id(value) -> UUID:
    return parse_id(value, NotFound, BOOK_NOT_FOUND)


def _store_files(pdf: Optional[UploadFile], poster: Optional[UploadFile]) -> List[Optional[str]]:
    """Persist the provided parts; on failure nothing written so far is left behind."""
    stored = []
    try:
        stored.append(persist_upload(pdf, is_pdf, "pdf", default_ext=".pdf") if pdf is not None else None)
        stored.append(persist_upload(poster, is_image, "poster") if poster is not None else None)
    except Exception:
        for name in stored:
            remove_upload(name)
        raise
    return stored


@transactional
def list_books(session: Session) -> list:
    return [book_details(book) for book in book_dao.fetchBooks(session)]


@transactional
def get_book(session: Session, book_id) -> dict:
    book = book_dao.fetchBookById(session, _book_id(book_id))
    if book is None:
        raise NotFound(BOOK_NOT_FOUND)
    return book_details(book)


@transactional
def _insert_book(session: Session, book: Book) -> dict:
    book_dao.createBook(session, book)
    return book_details(book)


def create_book(
    title: Optional[str],
    pdf: Optional[UploadFile],
    author: Optional[str] = None,
    description: Optional[str] = None,
    poster: Optional[UploadFile] = None,
) -> dict:
    """
    Create a catalog entry.

    Raises
    ------
    ValidationFailed
        Missing title, missing PDF, or a part with the wrong content type.
    PayloadTooLarge
        A part exceeds the upload limit.
    """
    if not title or not title.strip():
        raise ValidationFailed("title is required")
    if pdf is None:
        raise ValidationFailed("PDF file required")

    pdf_name, poster_name = _store_files(pdf, poster)
    book = Book(
        title=title.strip(),
        pdf_filename=pdf_name,
        author=author,
        description=description,
        poster_filename=poster_name,
    )
    try:
        created = _insert_book(book=book)
    except Exception:
        remove_upload(pdf_name)
        remove_upload(poster_name)
        raise
    logger.info("Created book %s", created["id"])
    return created


@transactional
def _apply_book_update(
    session: Session,
    book_id,
    title: Optional[str],
    author: Optional[str],
    description: Optional[str],
    pdf_name: Optional[str],
    poster_name: Optional[str],
):
    book = book_dao.fetchBookById(session, _book_id(book_id))
    if book is None:
        raise NotFound(BOOK_NOT_FOUND)
    if title is not None:
        book.title = title.strip()
    if author is not None:
        book.author = author
    if description is not None:
        book.description = description

    superseded = []
    if pdf_name:
        superseded.append(book.pdf_filename)
        book.pdf_filename = pdf_name
    if poster_name:
        superseded.append(book.poster_filename)
        book.poster_filename = poster_name
    return book_details(book), superseded


def update_book(
    book_id,
    title: Optional[str] = None,
    author: Optional[str] = None,
    description: Optional[str] = None,
    pdf: Optional[UploadFile] = None,
    poster: Optional[UploadFile] = None,
) -> dict:
    """
    Apply a partial update. Only provided fields change; replacement files are
    written first and the files they replace are removed after the commit.
    """
    if title is not None and not title.strip():
        raise ValidationFailed("title cannot be empty")
    # resolve the id before writing anything to disk
    _book_id(book_id)

    pdf_name, poster_name = _store_files(pdf, poster)
    try:
        updated, superseded = _apply_book_update(
            book_id=book_id,
            title=title,
            author=author,
            description=description,
            pdf_name=pdf_name,
            poster_name=poster_name,
        )
    except Exception:
        remove_upload(pdf_name)
        remove_upload(poster_name)
        raise
    for name in superseded:
        remove_upload(name)
    return updated


@transactional
def _delete_book_record(session: Session, book_id) -> List[Optional[str]]:
    book = book_dao.fetchBookById(session, _book_id(book_id))
    if book is None:
        raise NotFound(BOOK_NOT_FOUND)
    files = [book.pdf_filename, book.poster_filename]
    book_dao.deleteBook(session, book)
    return files


def delete_book(book_id) -> None:
    """Delete the record, then both of its files (missing files are ignored)."""
    for name in _delete_book_record(book_id=book_id):
        remove_upload(name)
    logger.info("Deleted book %s", book_id)
