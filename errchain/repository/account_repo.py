from __future__ import annotations

from typing import Any, Dict, List

from ..errors import NO_ROWS, InvalidQueryError, QueryError

# 模拟数据：账号基本信息与订单（不接真实数据库）
ACCOUNTS: Dict[str, Dict[str, Any]] = {
    "1001": {"account_id": "1001", "name": "alice", "tier": "GOLD"},
    "1002": {"account_id": "1002", "name": "bob", "tier": "BASIC"},
}

ORDERS: Dict[str, List[Dict[str, Any]]] = {
    "1001": [
        {"order_id": "A-1", "account_id": "1001", "amount": 120.0},
        {"order_id": "A-2", "account_id": "1001", "amount": 35.5},
    ],
    # 1002 没有订单
}


def _check_query(account_id: str, query: str) -> None:
    # 判断 query 是否合法属于 dao 层逻辑
    if not isinstance(account_id, str) or not account_id.strip():
        raise QueryError(query, InvalidQueryError())


def get_account(account_id: str) -> Dict[str, Any]:
    query = f"SELECT account_id, name, tier FROM account WHERE account_id={account_id}"
    _check_query(account_id, query)
    row = ACCOUNTS.get(account_id)
    if row is None:
        raise QueryError(query, NO_ROWS)
    return dict(row)


def list_orders(account_id: str) -> List[Dict[str, Any]]:
    query = f"SELECT order_id, account_id, amount FROM orders WHERE account_id={account_id}"
    _check_query(account_id, query)
    rows = ORDERS.get(account_id)
    if not rows:
        raise QueryError(query, NO_ROWS)
    return [dict(r) for r in rows]
