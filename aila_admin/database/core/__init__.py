"""
Service layer. One module per service; every function that touches the
database runs inside `@transactional` or `@lawyer_transactional`.
"""
