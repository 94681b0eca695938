"""
The `helpers` package provides utility functions and decorators
that support database operations and cross-cutting concerns.

Contents
--------
- transactionManagement
    Provides tools for database transaction management:
        - `transaction_manager(session_factory, name)` builds a decorator plus its context variable
        - `@transactional` wraps a function in a main-database transaction
        - `@lawyer_transactional` wraps a function in a lawyer-database transaction
        - Existing sessions in context are reused; otherwise a new session is created,
          committed and closed, and rolled back on errors
"""
