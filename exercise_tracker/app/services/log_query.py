"""
Query construction for exercise log lookups.

``build_log_query`` turns a ``LogQuery`` into a parameterised SELECT
over the ``exercises`` table.  The lookup is always restricted to one
user; the date bounds and the row cap are added only when present.
Rows come back in insertion order.
"""

from typing import Any, List, Tuple

from ..schemas.log import LogQuery

LOG_COLUMNS = "description, duration, date"


def build_log_query(query: LogQuery) -> Tuple[str, Tuple[Any, ...]]:
    """Return ``(sql, params)`` selecting the user's matching exercises."""
    where_clauses: List[str] = ["user_id = ?"]
    params: List[Any] = [query.user_id]
    if query.date_from is not None:
        where_clauses.append("date >= ?")
        params.append(query.date_from.isoformat())
    if query.date_to is not None:
        where_clauses.append("date <= ?")
        params.append(query.date_to.isoformat())
    sql = f"SELECT {LOG_COLUMNS} FROM exercises WHERE " + " AND ".join(where_clauses)
    sql += " ORDER BY id ASC"
    if query.limit is not None:
        sql += " LIMIT ?"
        params.append(query.limit)
    return sql, tuple(params)
