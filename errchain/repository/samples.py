"""Sample DAO failures: each returns (does not raise) an error value."""
from __future__ import annotations

from ..errors import NO_ROWS, ChainedError, InvalidQueryError, QueryError, wrap


def query_returns_invalid_query() -> QueryError:
    # 模拟 query 语句非法；错误信息带 dao 前缀
    return QueryError("sqlQueryReturnInvalidQuery", InvalidQueryError())


def query_returns_no_rows() -> QueryError:
    return QueryError("sqlQueryReturnNoRows", NO_ROWS)


def query_returns_no_rows_wrapped() -> ChainedError:
    return wrap(QueryError("sqlQueryReturnNoRowsWithWrap", NO_ROWS), "wrapped err")


SCENARIOS = {
    "no-rows": query_returns_no_rows,
    "invalid-query": query_returns_invalid_query,
    "no-rows-wrapped": query_returns_no_rows_wrapped,
}
