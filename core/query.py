"""Filtering and page-window slicing over collection contents."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10


def normalize_value(value: Any) -> str:
    """Text form used by every equality comparison in the store.

    ``101``, ``101.0`` and ``"101"`` all normalize to ``"101"``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    return str(value)


def same_value(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is right
    return normalize_value(left) == normalize_value(right)


def _matches(record: Mapping[str, Any], field: str, operator: str, value: Any) -> bool:
    if operator == "eq":
        if value is None:
            return True
        return same_value(record.get(field), value)
    if operator == "contains":
        if not value:
            return True
        current = record.get(field)
        haystack = "" if current is None else str(current)
        return str(value).lower() in haystack.lower()
    # Unknown operators do not filter
    return True


def apply_filters(records: Iterable[Dict[str, Any]], filters: Optional[List[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    data = list(records)
    for condition in filters or []:
        field = condition.get("field")
        operator = condition.get("operator")
        value = condition.get("value")
        data = [record for record in data if _matches(record, field, operator, value)]
    return data


def paginate(records: List[Dict[str, Any]], pagination: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Slice the 1-based page window; pages below 1 or empty page sizes yield nothing."""
    pagination = pagination or {}
    current = pagination.get("current")
    page_size = pagination.get("pageSize")
    if current is None:
        current = DEFAULT_PAGE
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    if current < 1 or page_size < 1:
        return []
    start = (current - 1) * page_size
    return records[start:start + page_size]


def run_query(
    records: Iterable[Dict[str, Any]],
    filters: Optional[List[Mapping[str, Any]]] = None,
    pagination: Optional[Mapping[str, Any]] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """Return the requested page and the filtered count before paging."""
    matched = apply_filters(records, filters)
    return paginate(matched, pagination), len(matched)
