"""PostgREST query-string helpers: operator filters, ordering, Content-Range."""

from __future__ import annotations

from typing import Any, Optional


def eq(value: Any) -> str:
    """Equality filter value, e.g. status=eq.sold."""
    return f"eq.{value}"


def ilike_contains(text: str) -> str:
    """Case-insensitive substring filter value, e.g. seller_name=ilike.*ali*.

    Backslash, % and _ are escaped so they match literally; PostgREST turns
    every * into %, so * in the text still acts as a wildcard.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"ilike.*{escaped}*"


def order_by(*columns: tuple[str, bool]) -> str:
    """Order clause from (column, descending) pairs, e.g. deal_date.desc,id.desc."""
    return ",".join(f"{name}.{'desc' if descending else 'asc'}" for name, descending in columns)


def parse_content_range(header: Optional[str]) -> Optional[int]:
    """Total from a Content-Range header ("0-19/57" -> 57, "*/0" -> 0); None if unknown."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1].strip()
    if total == "*":
        return None
    try:
        return int(total)
    except ValueError:
        return None
