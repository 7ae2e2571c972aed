"""
Read-only REST API over one Database using FastAPI. No secrets, no auth.
Routes forward to named operations through the continuation contract; the app never
opens a store itself. Build with create_app(db); serve with `workshop-db serve`.
"""
from __future__ import annotations

import html
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ._version import __version__
from .core.errors import (
    ArityError,
    OperationNotFoundError,
    ParameterTypeError,
    QueryTimeoutError,
    UsageError,
    WorkshopDbError,
)
from .database import Database
from .store.engine import Record

logger = logging.getLogger(__name__)


def _status_for(exc: WorkshopDbError) -> int:
    if isinstance(exc, OperationNotFoundError):
        return 404
    if isinstance(exc, (ArityError, ParameterTypeError)):
        return 400
    if isinstance(exc, UsageError):
        return 503
    if isinstance(exc, QueryTimeoutError):
        return 504
    return 500


def create_app(db: Database, *, timeout: Optional[float] = None) -> FastAPI:
    """FastAPI app bound to db. The caller owns db and closes it."""
    app = FastAPI(title="Workshop DB API", version=__version__)
    app.state.db = db

    def run(name: str, params: List[Any]) -> List[Record]:
        delivered: List[List[Record]] = []
        db.call(name, params, delivered.append).result(timeout=timeout)
        return delivered[0]

    @app.exception_handler(WorkshopDbError)
    async def _workshop_db_error(request: Request, exc: WorkshopDbError) -> JSONResponse:
        status = _status_for(exc)
        if status >= 500:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            page = f'<html><body><p>error: "{html.escape(str(request.url.path))}" not found</p></body></html>'
            return HTMLResponse(page, status_code=404)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok", "version": __version__, "store": db.state.value}

    @app.get("/operations")
    def operations() -> Dict[str, int]:
        return db.registry.arities()

    @app.get("/workshops")
    def all_workshops() -> List[Record]:
        return run("get_all", [])

    @app.get("/workshops/stats")
    def workshop_stats() -> Record:
        return run("get_stats", [])[0]

    @app.get("/workshops/range/{low}/{high}")
    def workshops_in_range(low: int, high: int) -> List[Record]:
        return run("get_range", [low, high])

    @app.get("/workshops/slice/{start}/{count}")
    def workshop_slice(start: int, count: int) -> List[Record]:
        return run("get_slice", [start, count])

    @app.get("/workshops/{ident}")
    def one_workshop(ident: int) -> Record:
        rows = run("get_one", [ident])
        if not rows:
            raise HTTPException(404, detail=f"Workshop {ident} not found")
        return rows[0]

    return app
