# app/client/view.py
"""In-memory search, sort and pagination over a fetched contact list.

Everything here is a pure function of its inputs; the application context
calls ``compute_view`` again after every change instead of keeping derived
state around.
"""

import math
from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Any, Literal, Mapping, Sequence

from pydantic import BaseModel

SortField = Literal["name", "email", "phone", "created_at"]
SortOrder = Literal["asc", "desc"]

SEARCH_FIELDS = ("name", "email", "phone", "address")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ContactFilters(BaseModel):
    search_query: str = ""
    sort_by: SortField = "name"
    sort_order: SortOrder = "asc"


class ContactView(BaseModel):
    contacts: list[Any]
    total: int
    filtered: int
    current_page: int
    total_pages: int
    page_size: int
    start_item: int
    end_item: int
    has_search: bool
    is_filtered: bool


def _get(contact: Any, field: str) -> Any:
    if isinstance(contact, Mapping):
        return contact.get(field)
    return getattr(contact, field, None)


def _as_instant(value: Any) -> datetime:
    if value is None:
        return _EPOCH
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _sort_key(contact: Any, field: str):
    if field == "created_at":
        return _as_instant(_get(contact, field))
    return str(_get(contact, field) or "").lower()


def filter_contacts(contacts: Sequence[Any], search_query: str) -> list[Any]:
    query = (search_query or "").strip().lower()
    if not query:
        return list(contacts)
    return [
        contact for contact in contacts
        if any(query in str(_get(contact, field) or "").lower() for field in SEARCH_FIELDS)
    ]


def sort_contacts(contacts: Sequence[Any], sort_by: str = "name", sort_order: str = "asc") -> list[Any]:
    # Direction flips the comparison, not the result, so ties keep their input order either way.
    sign = -1 if sort_order == "desc" else 1

    def compare(a, b) -> int:
        ka, kb = _sort_key(a, sort_by), _sort_key(b, sort_by)
        return sign * ((ka > kb) - (ka < kb))

    return sorted(contacts, key=cmp_to_key(compare))


def total_pages_for(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(count / page_size)


def clamp_page(page: int, count: int, page_size: int) -> int:
    """Reset to page 1 when the requested page does not exist."""
    if page < 1 or page > max(total_pages_for(count, page_size), 1):
        return 1
    return page


def paginate(items: Sequence[Any], page: int, page_size: int) -> list[Any]:
    page = clamp_page(page, len(items), page_size)
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def compute_view(
    contacts: Sequence[Any],
    filters: ContactFilters,
    page: int = 1,
    page_size: int = 10,
) -> ContactView:
    filtered = sort_contacts(
        filter_contacts(contacts, filters.search_query),
        filters.sort_by,
        filters.sort_order,
    )
    current_page = clamp_page(page, len(filtered), page_size)
    page_items = paginate(filtered, current_page, page_size)
    start_item = (current_page - 1) * page_size + 1 if page_items else 0
    has_search = bool(filters.search_query.strip())

    return ContactView(
        contacts=page_items,
        total=len(contacts),
        filtered=len(filtered),
        current_page=current_page,
        total_pages=total_pages_for(len(filtered), page_size),
        page_size=page_size,
        start_item=start_item,
        end_item=start_item + len(page_items) - 1 if page_items else 0,
        has_search=has_search,
        is_filtered=has_search or len(filtered) != len(contacts),
    )
