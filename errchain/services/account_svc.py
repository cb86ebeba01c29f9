"""
账号业务层
Dao 层返回的 no rows 对业务来说可能可以忽略（比如：账号没有订单），也可能不能忽略
（比如：根据账号 ID 获取不到账号基本信息），所以业务层必须对 Dao 层返回的错误进行校验。
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging

from ..errors import NO_ROWS, ChainedError, error_is, format_chain, wrap
from ..logs import OperationLogContext
from ..repository import account_repo

logger = logging.getLogger(__name__)


class AccountNotFoundError(ChainedError):
    """No-rows on the account itself; the service treats this as exceptional."""

    context_label = "account"


def is_no_rows(err: BaseException) -> bool:
    logger.debug("checking %s:\n%s", type(err).__name__, format_chain(err))
    return error_is(err, NO_ROWS)


def get_account_profile(account_id: str, log: OperationLogContext | None = None) -> Dict[str, Any]:
    try:
        row = account_repo.get_account(account_id)
    except ChainedError as e:
        if is_no_rows(e):
            # 异常流程：账号不存在
            raise AccountNotFoundError(f"account_id={account_id}", e)
        raise wrap(e, "get_account_profile")
    if log is not None:
        log.set_entity("ACCOUNT", account_id)
    return row


def list_account_orders(account_id: str, log: OperationLogContext | None = None) -> List[Dict[str, Any]]:
    try:
        orders = account_repo.list_orders(account_id)
    except ChainedError as e:
        if is_no_rows(e):
            # 正常流程：没有订单不算错误
            logger.info("account %s has no orders", account_id)
            return []
        raise wrap(e, "list_account_orders")
    if log is not None:
        log.set_entity("ACCOUNT", account_id)
    return orders


def account_overview(account_id: str, log: OperationLogContext | None = None) -> Dict[str, Any]:
    profile = get_account_profile(account_id, log)
    orders = list_account_orders(account_id, log)
    return {
        "account": profile,
        "orders": orders,
        "order_count": len(orders),
        "order_total": round(sum(float(o["amount"]) for o in orders), 2),
    }
