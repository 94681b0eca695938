"""
Database Transaction Management
===============================

This module provides utilities for managing SQLAlchemy database sessions
using Python context variables and a decorator-based transaction wrapper.

It allows seamless propagation of a database session across function calls
without explicitly threading it through arguments. Functions can be safely
decorated with ``@transactional`` (main database) or ``@lawyer_transactional``
(lawyer database) to ensure they run inside a managed transactional context.

Key features
~~~~~~~~~~~~
- One context variable per logical database to store the active session
- Implicit reuse of existing sessions
- Automatic commit and rollback handling
- Clean session closure after execution
- Decorator pattern for function-level transaction management

"""

import contextvars
from functools import wraps

from sqlalchemy.orm import sessionmaker

from aila_admin.database.config.connection_engine import connection_engine, lawyer_connection_engine


def transaction_manager(session_factory: sessionmaker, name: str):
    """
    Build a ``@transactional``-style decorator bound to one session factory.

    Parameters
    ----------
    session_factory : sessionmaker
        Factory producing sessions for the target database.
    name : str
        Name of the context variable holding the active session.

    Returns
    -------
    tuple
        ``(decorator, context_variable)``.
    """
    session_context = contextvars.ContextVar(name, default=None)

    def decorator(func):
        """
        Wrap `func` in a managed SQLAlchemy transaction.

        Ensures that:
        - If a session already exists in context, it is reused.
        - Otherwise, a new session is created, committed, and closed.
        - On errors, the session is rolled back and closed.

        The wrapped function must accept a `session` keyword argument; callers
        pass every other argument by keyword.

        Example
        -------
        >>> @transactional
        ... def create_book(session: Session, book: Book):
        ...     session.add(book)
        ...     return book
        ...
        >>> book = create_book(book=Book(...))
        """
        @wraps(func)
        def wrap_func(*args, **kwargs):
            session = session_context.get()
            if session:
                return func(*args, session=session, **kwargs)

            session = session_factory()
            token = session_context.set(session)

            try:
                result = func(*args, session=session, **kwargs)
                session.flush()
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()
                session_context.reset(token)

            return result

        return wrap_func

    return decorator, session_context


SessionLocal = sessionmaker(bind=connection_engine, expire_on_commit=False)
"""Session factory of the main database."""

LawyerSessionLocal = sessionmaker(bind=lawyer_connection_engine, expire_on_commit=False)
"""Session factory of the lawyer database."""

transactional, db_session_context = transaction_manager(SessionLocal, "db_session_context")
"""Decorator running a function inside a main-database transaction."""

lawyer_transactional, lawyer_session_context = transaction_manager(
    LawyerSessionLocal, "lawyer_session_context"
)
"""Decorator running a function inside a lawyer-database transaction."""
