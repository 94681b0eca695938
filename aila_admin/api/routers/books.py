"""
FastAPI Router - Book catalog
=============================

Reads are public; creating, updating and deleting books requires an admin
token. Writes take multipart/form-data with the text fields `title`,
`author`, `description` and the file parts `pdf` and `poster`.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from aila_admin.api.security import require_admin
from aila_admin.database.core.books import create_book, delete_book, get_book, list_books, update_book

router = APIRouter(prefix="/books", tags=["books"])


@router.get("")
def read_books():
    """All books, most recent first."""
    return list_books()


@router.get("/{book_id}")
def read_book(book_id: str):
    return get_book(book_id=book_id)


@router.post("", status_code=201)
def add_book(
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    pdf: Optional[UploadFile] = File(None),
    poster: Optional[UploadFile] = File(None),
    identity: dict = Depends(require_admin),
):
    """Create a book. `title` and a PDF `pdf` part are required; `poster` must be an image."""
    return create_book(title=title, author=author, description=description, pdf=pdf, poster=poster)


@router.put("/{book_id}")
def edit_book(
    book_id: str,
    title: Optional[str] = Form(None),
    author: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    pdf: Optional[UploadFile] = File(None),
    poster: Optional[UploadFile] = File(None),
    identity: dict = Depends(require_admin),
):
    """Partial update; replaced files are removed once the change is saved."""
    return update_book(
        book_id=book_id,
        title=title,
        author=author,
        description=description,
        pdf=pdf,
        poster=poster,
    )


@router.delete("/{book_id}")
def remove_book(book_id: str, identity: dict = Depends(require_admin)):
    delete_book(book_id=book_id)
    return {"message": "Deleted"}
