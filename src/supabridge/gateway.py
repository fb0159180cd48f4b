"""
Supabridge - Query Gateway.

Turns a QueryRequest into a single PostgREST read:
- table(name).select(columns)
- one builder call per recognised filter clause, in order
- limit(n), always applied
- execute() exactly once

Also lists tables with exact row counts (one count query per table).
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from supabridge.config import BridgeSettings, get_settings
from supabridge.db.client import get_client
from supabridge.models import FilterClause, FilterOperator, QueryRequest, TableInfo

logger = logging.getLogger(__name__)

ClientProvider = Callable[[], Awaitable[Any]]

DEFAULT_LIMIT = 100


# =============================================================================
# Errors
# =============================================================================


class GatewayError(Exception):
    """Base class for errors reported to the caller as {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    """The request is missing something required (HTTP 400)."""

    status_code = 400


class StoreError(GatewayError):
    """The store call failed; message is the store's own (HTTP 500)."""

    status_code = 500


def store_message(exc: Exception) -> str:
    """Extract the store's error message without rewording it."""
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


# =============================================================================
# Filter Application Helpers
# =============================================================================


def parse_filter(raw: Any) -> FilterClause | None:
    """
    Turn a raw filter object into a FilterClause.

    Returns None (and logs why) for anything that cannot be applied:
    non-objects, missing column/operator/value, or an unknown operator.
    """
    if isinstance(raw, FilterClause):
        return raw
    if not isinstance(raw, dict):
        logger.warning("Dropping filter %r: not an object", raw)
        return None

    column = raw.get("column")
    operator = raw.get("operator")
    value = raw.get("value")

    if not column or not isinstance(column, str):
        logger.warning("Dropping filter %r: missing column", raw)
        return None
    if not operator or not isinstance(operator, str):
        logger.warning("Dropping filter %r: missing operator", raw)
        return None
    if value is None:
        logger.warning("Dropping filter %r: missing value", raw)
        return None

    try:
        op = FilterOperator(operator)
    except ValueError:
        logger.warning("Dropping filter on %s: unknown operator %r", column, operator)
        return None

    return FilterClause(column=column, operator=op, value=value)


def apply_filter(query: Any, f: FilterClause) -> Any:
    """Apply a single filter clause to a Supabase query."""
    match f.operator:
        case FilterOperator.EQ:
            return query.eq(f.column, f.value)
        case FilterOperator.NEQ:
            return query.neq(f.column, f.value)
        case FilterOperator.GT:
            return query.gt(f.column, f.value)
        case FilterOperator.GTE:
            return query.gte(f.column, f.value)
        case FilterOperator.LT:
            return query.lt(f.column, f.value)
        case FilterOperator.LTE:
            return query.lte(f.column, f.value)
        case FilterOperator.LIKE:
            return query.like(f.column, f"%{f.value}%")
        case FilterOperator.ILIKE:
            return query.ilike(f.column, f"%{f.value}%")
    return query


def resolve_limit(limit: Any, default: int = DEFAULT_LIMIT) -> int:
    """
    Effective row cap for a query.

    Accepts a positive int, a whole-number float (JSON 2.0), or a string
    holding an int; everything else (None, bools, fractional floats, junk,
    zero, negatives) falls back to default.
    """
    if isinstance(limit, bool):
        return default
    if isinstance(limit, int):
        parsed = limit
    elif isinstance(limit, float) and limit.is_integer():
        parsed = int(limit)
    elif isinstance(limit, str):
        try:
            parsed = int(limit.strip())
        except ValueError:
            return default
    else:
        return default
    return parsed if parsed > 0 else default


# =============================================================================
# Gateway
# =============================================================================


class QueryGateway:
    """
    Read-only bridge between HTTP requests and the Supabase client.

    Holds no per-request state; safe to share across concurrent requests.
    """

    def __init__(
        self,
        client_provider: ClientProvider = get_client,
        settings: BridgeSettings | None = None,
    ):
        self._client_provider = client_provider
        self._settings = settings or get_settings()

    @property
    def default_limit(self) -> int:
        return self._settings.supabridge_default_limit

    async def _client(self) -> Any:
        try:
            return await self._client_provider()
        except Exception as e:
            logger.error("Supabase client unavailable: %s", e)
            raise StoreError(store_message(e)) from e

    def build_query(self, client: Any, request: QueryRequest) -> Any:
        """Compose select + filters + limit without executing."""
        query = client.table(request.table_name).select(request.select_clause)

        for raw in request.filters or []:
            clause = parse_filter(raw)
            if clause is not None:
                query = apply_filter(query, clause)

        return query.limit(resolve_limit(request.limit, self.default_limit))

    async def execute(self, request: QueryRequest) -> list[dict]:
        """
        Run a filtered read.

        Raises:
            ValidationError: tableName missing or empty (no store call made)
            StoreError: anything the store client raised
        """
        if not request.table_name:
            raise ValidationError("tableName is required")

        client = await self._client()
        query = self.build_query(client, request)

        try:
            response = await query.execute()
        except Exception as e:
            logger.error("Error querying %s: %s", request.table_name, e)
            raise StoreError(store_message(e)) from e

        rows = response.data or []
        logger.info("Queried %s: %d rows", request.table_name, len(rows))
        return rows

    async def discover_tables(self) -> list[str]:
        """Table names from SUPABRIDGE_TABLES, else from pg_tables."""
        if self._settings.known_tables:
            return self._settings.known_tables

        client = await self._client()
        try:
            response = await (
                client.table("pg_tables")
                .select("tablename")
                .eq("schemaname", self._settings.supabridge_db_schema)
                .execute()
            )
        except Exception as e:
            logger.error("Error fetching tables: %s", e)
            raise StoreError(store_message(e)) from e

        return [row["tablename"] for row in response.data or [] if row.get("tablename")]

    async def count_rows(self, client: Any, table: str) -> int:
        """Exact row count for a table; 0 if the count query fails."""
        try:
            response = await client.table(table).select("*", count="exact", head=True).execute()
        except Exception as e:
            logger.warning("Could not count rows in %s: %s", table, e)
            return 0
        return max(response.count or 0, 0)

    async def list_tables(self) -> list[TableInfo]:
        """Every known table with its row count. Counts run concurrently."""
        names = await self.discover_tables()
        # Client failures (e.g. missing credentials) fail the whole listing
        client = await self._client()
        counts = await asyncio.gather(*(self.count_rows(client, name) for name in names))
        return [TableInfo(table_name=name, row_count=count) for name, count in zip(names, counts)]
