"""Tests for the log query builder."""
import datetime

from exercise_tracker.app.schemas.log import LogQuery
from exercise_tracker.app.services.log_query import build_log_query


def test_user_only():
    sql, params = build_log_query(LogQuery(user_id="u1"))

    assert sql == "SELECT description, duration, date FROM exercises WHERE user_id = ? ORDER BY id ASC"
    assert params == ("u1",)


def test_both_bounds_and_limit():
    query = LogQuery(
        user_id="u1",
        date_from=datetime.date(2023, 1, 1),
        date_to=datetime.date(2023, 1, 31),
        limit=2,
    )

    sql, params = build_log_query(query)

    assert "user_id = ? AND date >= ? AND date <= ?" in sql
    assert sql.endswith("ORDER BY id ASC LIMIT ?")
    assert params == ("u1", "2023-01-01", "2023-01-31", 2)


def test_only_lower_bound():
    sql, params = build_log_query(LogQuery(user_id="u1", date_from=datetime.date(2023, 1, 1)))

    assert "date >= ?" in sql
    assert "date <= ?" not in sql
    assert params == ("u1", "2023-01-01")


def test_only_upper_bound():
    sql, params = build_log_query(LogQuery(user_id="u1", date_to=datetime.date(2023, 1, 31)))

    assert "date <= ?" in sql
    assert "date >= ?" not in sql
    assert params == ("u1", "2023-01-31")


def test_no_limit_clause_without_limit():
    sql, _ = build_log_query(LogQuery.from_params("u1", limit="not a number"))

    assert "LIMIT" not in sql


def test_from_params_parses_strings():
    query = LogQuery.from_params("u1", date_from="2023-01-01", date_to="", limit="10")

    assert query.date_from == datetime.date(2023, 1, 1)
    assert query.date_to is None
    assert query.limit == 10
