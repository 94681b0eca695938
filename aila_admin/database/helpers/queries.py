"""
Query helpers shared by the listing services.

- `page_window(page, limit)` normalizes paging input (page ≥ 1, limit 1..100)
- `sort_clause(sort_by, sort_order, columns)` turns a public sort field name into an ORDER BY clause
- `contains_any(term, columns)` builds the OR-joined case-insensitive substring filter
- `paginate(query, page, limit)` runs the count + page queries
- `page_envelope(items, page, limit, total)` builds the public pagination envelope
- `parse_id(value, error)` validates an id string before any query runs
"""

import math
import uuid
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy import String, asc, cast, desc, or_
from sqlalchemy.orm import Query

from aila_admin.errors import ServiceError, ValidationFailed

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


def page_window(page: Optional[int], limit: Optional[int]) -> Tuple[int, int]:
    page = max(1, page or 1)
    limit = min(MAX_PAGE_LIMIT, max(1, limit or DEFAULT_PAGE_LIMIT))
    return page, limit


def sort_clause(sort_by: str, sort_order: str, columns: Dict[str, Any]):
    """
    Map a public sort field onto a column.

    Raises
    ------
    ValidationFailed
        If `sort_by` is not one of `columns` or `sort_order` is not asc/desc.
    """
    column = columns.get(sort_by)
    if column is None:
        raise ValidationFailed(f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sorted(columns))}")
    order = (sort_order or "desc").lower()
    if order not in ("asc", "desc"):
        raise ValidationFailed("sortOrder must be 'asc' or 'desc'")
    return asc(column) if order == "asc" else desc(column)


def contains_any(term: str, columns: List[Any]):
    """OR of case-insensitive substring matches of `term` over `columns`.

    Non-text columns (JSON lists) are compared through their text rendering.
    `%` and `_` in the term are matched literally.
    """
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"
    clauses = []
    for column in columns:
        if not isinstance(column.type, String):
            column = cast(column, String)
        clauses.append(column.ilike(pattern, escape="\\"))
    return or_(*clauses)


def paginate(query: Query, page: int, limit: int) -> Tuple[list, int]:
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def page_envelope(items: list, page: int, limit: int, total: int) -> dict:
    return {
        "items": items,
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit),
    }


def parse_id(value: Any, error: Type[ServiceError] = ValidationFailed, detail: str = "Invalid ID format") -> uuid.UUID:
    """Parse `value` as a UUID, raising `error(detail)` when it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise error(detail) from None
