"""
FastAPI app entry point aggregating routers under errchain/routes.
Keep as `uvicorn errchain.api:app`.
"""
from __future__ import annotations


from fastapi import FastAPI

from .db import configure_logging
from .logs import ensure_log_schema


app = FastAPI(title="errchain-api", version="0.1.0")


@app.on_event("startup")
def on_startup():
    configure_logging()
    ensure_log_schema()


# Include routers
from .routes import base as base_routes
from .routes import accounts as accounts_routes
from .routes import logs as logs_routes

app.include_router(base_routes.router)
app.include_router(accounts_routes.router)
app.include_router(logs_routes.router)
