"""
Supabridge - Request and response models.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterOperator(str, Enum):
    """Comparison operators accepted in a filter clause."""

    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"  # Substring, case-sensitive
    ILIKE = "ilike"  # Substring, case-insensitive


class FilterClause(BaseModel):
    """A single column/operator/value condition."""

    column: str
    operator: FilterOperator
    value: Any


class QueryRequest(BaseModel):
    """
    Body of POST /api/query.

    Only tableName is required, and that is checked by the gateway rather
    than here so that a missing table name is reported as a 400 with the
    usual error envelope. Filters stay raw: malformed clauses are dropped
    one by one instead of failing the whole request.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    table_name: str | None = Field(default=None, alias="tableName")
    columns: str | list[str] | None = None
    filters: list[Any] | None = None
    limit: Any = None

    @field_validator("table_name")
    @classmethod
    def _strip_table_name(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    @property
    def select_clause(self) -> str:
        if isinstance(self.columns, list):
            joined = ",".join(c.strip() for c in self.columns if c and c.strip())
            return joined or "*"
        return self.columns.strip() if self.columns and self.columns.strip() else "*"


class TableInfo(BaseModel):
    table_name: str
    row_count: int = Field(ge=0)


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    message: str = "API is running"
