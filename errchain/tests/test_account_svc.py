"""
账号业务层测试：no rows 可忽略 / 不可忽略两种流程
"""
import logging

import pytest

from errchain.errors import NO_ROWS, ChainedError, InvalidQueryError, QueryError, cause_of, error_is
from errchain.logs import OperationLogContext
from errchain.services import account_svc
from errchain.services.account_svc import AccountNotFoundError


def test_is_no_rows_direct_and_wrapped():
    assert account_svc.is_no_rows(NO_ROWS)
    assert account_svc.is_no_rows(QueryError("q", NO_ROWS))
    assert not account_svc.is_no_rows(QueryError("q", InvalidQueryError()))


def test_is_no_rows_logs_chain(caplog):
    with caplog.at_level(logging.DEBUG, logger="errchain"):
        account_svc.is_no_rows(QueryError("sqlQueryReturnNoRows", NO_ROWS))
    assert "QueryError: query: sqlQueryReturnNoRows" in caplog.text


def test_profile_found_sets_entity():
    log = OperationLogContext("TEST")
    row = account_svc.get_account_profile("1001", log)
    assert row["tier"] == "GOLD"
    assert (log.entity_type, log.entity_id) == ("ACCOUNT", "1001")


def test_profile_missing_is_exceptional():
    with pytest.raises(AccountNotFoundError) as exc:
        account_svc.get_account_profile("9999")
    err = exc.value
    assert err.context == "account_id=9999"
    assert isinstance(cause_of(err), QueryError)
    assert error_is(err, NO_ROWS)
    assert "account: account_id=9999" in str(err)


def test_profile_invalid_query_is_wrapped():
    with pytest.raises(ChainedError) as exc:
        account_svc.get_account_profile("")
    err = exc.value
    assert not isinstance(err, AccountNotFoundError)
    assert err.context == "get_account_profile"
    assert error_is(err, InvalidQueryError)
    assert not error_is(err, NO_ROWS)


def test_orders_no_rows_is_ignorable():
    assert account_svc.list_account_orders("1002") == []


def test_orders_invalid_query_propagates():
    with pytest.raises(ChainedError) as exc:
        account_svc.list_account_orders(" ")
    assert exc.value.context == "list_account_orders"


def test_overview():
    out = account_svc.account_overview("1001")
    assert out["order_count"] == 2
    assert out["order_total"] == 155.5

    out = account_svc.account_overview("1002")
    assert out["account"]["name"] == "bob"
    assert out["orders"] == [] and out["order_count"] == 0
