"""
Utility functions for BrokerDesk Backend

Common helpers used across selectors, serializers and views.
"""
import math
from collections.abc import Callable, Iterable

from .constants import PAGINATION


def normalize_name(name: str | None) -> str:
    """
    Normalize a provider / vehicle class name for storage and uniqueness.

    Returns:
        Name trimmed and lower-cased ('' for None)
    """
    return (name or '').strip().lower()


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested page size to [1, max_limit]."""
    if not limit or limit < 1:
        return PAGINATION['default_limit']
    return min(limit, PAGINATION['max_limit'])


def build_pagination(page: int, limit: int, total_count: int) -> dict:
    """
    Build the pagination block returned by every list endpoint.
    """
    total_pages = math.ceil(total_count / limit) if total_count else 0
    return {
        'currentPage': page,
        'totalPages': total_pages,
        'totalCount': total_count,
        'limit': limit,
        'hasNextPage': page < total_pages,
        'hasPrevPage': page > 1,
    }


def paginate_queryset(
    queryset,
    *,
    page: int = 1,
    limit: int | None = None,
    serialize: Callable[[Iterable], list] = list,
) -> tuple[list, dict]:
    """
    Slice a queryset into one page.

    Args:
        queryset: Ordered queryset
        page: Page number (1-indexed)
        limit: Items per page (clamped)
        serialize: Callable turning the page of rows into output items

    Returns:
        (items, pagination) tuple
    """
    page = max(page or 1, 1)
    limit = clamp_limit(limit)
    offset = (page - 1) * limit

    total_count = queryset.count()
    if total_count == 0:
        return [], build_pagination(page, limit, 0)

    rows = queryset[offset:offset + limit]
    return serialize(rows), build_pagination(page, limit, total_count)


def resolve_ordering(order_by: str | None, order: str | None, allowed: dict[str, str], default: str) -> str:
    """
    Map a client-side sort key onto a model field ordering.

    Args:
        order_by: Requested sort key (camelCase or snake_case)
        order: 'asc' or 'desc'
        allowed: Whitelist of sort key -> model field
        default: Ordering used when order_by is missing or not allowed

    Returns:
        Django ordering string
    """
    field = allowed.get(order_by or '')
    if not field:
        return default
    return f'-{field}' if (order or 'desc').lower() == 'desc' else field
