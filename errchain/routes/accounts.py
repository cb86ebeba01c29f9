from __future__ import annotations

from fastapi import APIRouter, HTTPException

from ..errors import to_dict
from ..logs import OperationLogContext
from ..services.account_svc import (
    AccountNotFoundError,
    account_overview,
    list_account_orders,
)

router = APIRouter()


def _fail(log: OperationLogContext, e: Exception, status_code: int):
    log.set_error(e)
    log.write("ERROR", str(e))
    raise HTTPException(status_code=status_code, detail=to_dict(e))


@router.get("/api/accounts/{account_id}")
def api_account_overview(account_id: str):
    log = OperationLogContext("GET_ACCOUNT")
    log.set_payload({"account_id": account_id})
    try:
        out = account_overview(account_id, log)
    except AccountNotFoundError as e:
        _fail(log, e, 404)
    except Exception as e:
        _fail(log, e, 500)
    log.write("OK")
    return out


@router.get("/api/accounts/{account_id}/orders")
def api_account_orders(account_id: str):
    log = OperationLogContext("LIST_ORDERS")
    log.set_payload({"account_id": account_id})
    try:
        items = list_account_orders(account_id, log)
    except Exception as e:
        _fail(log, e, 500)
    log.write("OK")
    return {"total": len(items), "items": items}
