"""
Supabridge Web - FastAPI application.

Every error leaves as {"error": message}: 400 for bad requests, 500 for
store failures.
"""

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from supabridge import __version__
from supabridge.config import get_settings
from supabridge.db.client import get_client
from supabridge.gateway import GatewayError, QueryGateway
from supabridge.models import ErrorResponse, HealthResponse, QueryRequest, TableInfo
from supabridge.web.plugin_routes import router as plugin_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Supabridge", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup, and check credentials if asked to."""
    settings = get_settings()
    logger.info("Supabridge starting up...")
    logger.info(f"  Supabase URL: {settings.supabase_url or '(not set)'}")
    logger.info(f"  Default limit: {settings.supabridge_default_limit}")
    logger.info(f"  Tables: {settings.known_tables or 'discovered from pg_tables'}")

    if settings.supabridge_fail_fast:
        # Raises StoreConfigError and aborts startup when credentials are missing
        await get_client()


app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(plugin_router)


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Exception when handling %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


# =============================================================================
# Dependencies
# =============================================================================


def get_gateway() -> QueryGateway:
    """Gateway bound to the shared Supabase client."""
    return QueryGateway()


# =============================================================================
# Endpoints
# =============================================================================


@app.get("/health")
async def health_check() -> HealthResponse:
    """Liveness check."""
    return HealthResponse()


@app.get("/api/tables", responses={500: {"model": ErrorResponse}})
async def list_tables(gateway: QueryGateway = Depends(get_gateway)) -> list[TableInfo]:
    """List tables with exact row counts."""
    return await gateway.list_tables()


@app.post(
    "/api/query",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def query_table(req: QueryRequest, gateway: QueryGateway = Depends(get_gateway)) -> list[dict]:
    """Query a table with optional columns, filters and limit."""
    return await gateway.execute(req)
