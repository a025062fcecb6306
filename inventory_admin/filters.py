"""
Free-text search and facet filtering over store rows.

Filtering never touches the store collection; it always returns a new list.
"""
from typing import Any, Dict, Iterable, List, Optional, Sequence

ALL = 'all'


def is_active_facet(value: Any) -> bool:
    """A facet filters only when it has a value other than empty or "all"."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != '' and value.strip().lower() != ALL
    return True


def matches_query(row: Dict[str, Any], query: Optional[str], fields: Sequence[str]) -> bool:
    """Case-insensitive substring match of query against any of the fields."""
    if not query:
        return True

    needle = query.lower()
    for field in fields:
        value = row.get(field)
        if value is not None and needle in str(value).lower():
            return True
    return False


def matches_facets(row: Dict[str, Any], facets: Optional[Dict[str, Any]]) -> bool:
    """Exact match of every active facet against the row."""
    for field, value in (facets or {}).items():
        if is_active_facet(value) and row.get(field) != value:
            return False
    return True


def filter_rows(
    rows: Iterable[Dict[str, Any]],
    query: Optional[str] = None,
    fields: Sequence[str] = ('name',),
    facets: Optional[Dict[str, Any]] = None
) -> List[Dict[str, Any]]:
    """Return the rows visible for a search query and facet selection.

    Args:
        rows: Rows to filter
        query: Free-text query; empty matches everything
        fields: Text fields searched by the query
        facets: Mapping of field to required value; empty or "all" is ignored

    Returns:
        New list of matching rows, in input order
    """
    return [
        row for row in rows
        if matches_query(row, query, fields) and matches_facets(row, facets)
    ]


def facet_values(rows: Iterable[Dict[str, Any]], field: str) -> List[Any]:
    """Distinct non-empty values of a field, sorted, for building facet pickers."""
    return sorted({row.get(field) for row in rows if row.get(field) not in (None, '')}, key=str)
