"""Mini README: FastAPI application serving the Sheet Ledger JSON API.

Structure:
    * create_application - application factory wiring routes, error handlers,
      CORS and the record store lifecycle.
    * envelope - build the ``{success, message, data, error}`` response body.

Routes live under ``/api``. Every response, including failures, uses the same
JSON envelope. Ledger errors map to their ``status_code`` and anything
unexpected becomes a 500 with ``Something broke!``. GET requests outside the
API are answered from the static directory, falling back to ``index.html`` so
the browser front end can handle its own routing.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..configuration import LedgerSettings, get_settings
from ..ledger import BookkeepingService
from ..logging_utils import configure_root_logger, get_logger
from ..records import LedgerError, NotFoundError
from ..storage import RecordStore, build_store

LOGGER = get_logger(__name__)


def envelope(
    status_code: int = 200,
    *,
    success: bool = True,
    message: Optional[str] = None,
    data: Any = None,
    error: Optional[str] = None,
) -> JSONResponse:
    """Return a JSON response in the shared envelope, omitting empty keys."""

    body: Dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if error is not None:
        body["error"] = error
    return JSONResponse(body, status_code=status_code)


def _describe_request_errors(error: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in error.errors()
    )


def create_application(
    settings: Optional[LedgerSettings] = None,
    store: Optional[RecordStore] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    record_store = store or build_store(settings)
    service = BookkeepingService(record_store, cost_per_sheet=settings.production_cost_per_sheet)
    static_directory = Path(settings.static_directory)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await record_store.open()
        LOGGER.info(
            "Sheet Ledger ready (%s store, environment=%s)",
            record_store.backend_name,
            settings.environment,
        )
        try:
            yield
        finally:
            await record_store.close()
            LOGGER.info("Sheet Ledger stopped")

    app = FastAPI(title="Sheet Ledger", version=__version__, lifespan=lifespan)
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(LedgerError)
    async def ledger_error(request: Request, error: LedgerError) -> JSONResponse:
        if error.status_code >= 500:
            LOGGER.error("%s %s failed: %s (%s)", request.method, request.url.path, error.message, error.detail)
        return envelope(
            error.status_code,
            success=False,
            message=error.message,
            error=error.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, error: RequestValidationError) -> JSONResponse:
        return envelope(
            400,
            success=False,
            message="Invalid request payload",
            error=_describe_request_errors(error),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, error: StarletteHTTPException) -> JSONResponse:
        return envelope(error.status_code, success=False, message=str(error.detail))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, error: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
        return envelope(500, success=False, message="Something broke!", error=str(error))

    @app.post("/api/sales")
    async def create_sale(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        """Record a sale."""

        sale = await service.create_sale(payload)
        return envelope(201, message="Sale recorded successfully", data=sale.as_dict())

    @app.put("/api/sales/{sale_id}")
    async def update_sale(sale_id: str, payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        """Replace the fields of an existing sale."""

        sale = await service.update_sale(sale_id, payload)
        return envelope(message="Sale updated successfully", data=sale.as_dict())

    @app.delete("/api/sales/{sale_id}")
    async def delete_sale(sale_id: str) -> JSONResponse:
        """Delete a sale and return its last state."""

        sale = await service.delete_sale(sale_id)
        return envelope(message="Sale deleted successfully", data=sale.as_dict())

    @app.post("/api/expenses")
    async def create_expense(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        """Record an expense."""

        expense = await service.create_expense(payload)
        return envelope(201, message="Expense recorded successfully", data=expense.as_dict())

    @app.put("/api/expenses/{expense_id}")
    async def update_expense(expense_id: str, payload: Dict[str, Any] = Body(...)) -> JSONResponse:
        """Replace the fields of an existing expense."""

        expense = await service.update_expense(expense_id, payload)
        return envelope(message="Expense updated successfully", data=expense.as_dict())

    @app.delete("/api/expenses/{expense_id}")
    async def delete_expense(expense_id: str) -> JSONResponse:
        """Delete an expense and return its last state."""

        expense = await service.delete_expense(expense_id)
        return envelope(message="Expense deleted successfully", data=expense.as_dict())

    @app.get("/api/transactions")
    async def list_transactions(
        start_date: Optional[str] = Query(None, alias="startDate"),
        end_date: Optional[str] = Query(None, alias="endDate"),
        kind: Optional[str] = Query(None, alias="type"),
    ) -> JSONResponse:
        """List sales and/or expenses, newest first."""

        transactions = await service.list_transactions(start_date, end_date, kind)
        LOGGER.debug("Returning transactions: %s", {key: len(value) for key, value in transactions.items()})
        return envelope(data=transactions)

    @app.get("/api/summary")
    async def summary(period: Optional[str] = Query(None)) -> JSONResponse:
        """Return the financial summary for a reporting period."""

        report = await service.summary(period)
        return envelope(data=report.as_dict())

    @app.get("/{asset_path:path}", include_in_schema=False)
    async def static_fallback(asset_path: str) -> FileResponse:
        """Serve static assets, falling back to the front end's index page."""

        root = static_directory.resolve()
        candidate = (root / asset_path).resolve()
        if asset_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        index = root / "index.html"
        if index.is_file():
            return FileResponse(index)
        raise NotFoundError("Page not found")

    return app
