from __future__ import annotations

from fastapi import APIRouter

from ..db import get_conn

router = APIRouter()


@router.get("/health")
def health():
    with get_conn() as conn:
        row = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='operation_log'"
        ).fetchone()
    return {"status": "ok", "operation_log": row is not None}


@router.get("/version")
def version():
    return {"app": "errchain-api", "version": "0.1.0"}
