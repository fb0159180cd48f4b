"""
Plugin discovery endpoints.

Static responses that let an agent find and describe the API: capability
summary, OpenAI plugin manifest, OpenAPI document and logo. Only the host
and scheme are taken from the request.
"""

from typing import Any

import yaml
from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, PlainTextResponse, Response

from supabridge import __version__
from supabridge.config import get_settings

router = APIRouter(tags=["plugin"])


# =============================================================================
# Documents
# =============================================================================


def build_manifest(base_url: str) -> dict[str, Any]:
    """OpenAI plugin manifest pointing at base_url."""
    settings = get_settings()
    return {
        "schema_version": "v1",
        "name_for_human": "Supabase Data Explorer",
        "name_for_model": "supabase_data_explorer",
        "description_for_human": "Explore and query your Supabase database tables.",
        "description_for_model": (
            "Plugin for querying and exploring Supabase database tables. Use this "
            "when the user wants to analyze or retrieve data from their Supabase database."
        ),
        "auth": {"type": "none"},
        "api": {"type": "openapi", "url": f"{base_url}/openapi.yaml"},
        "logo_url": f"{base_url}/logo.png",
        "contact_email": settings.supabridge_contact_email,
        "legal_info_url": settings.supabridge_legal_info_url,
    }


def build_openapi(host: str) -> dict[str, Any]:
    """OpenAPI 3.0 description of /api/tables and /api/query."""
    filter_schema = {
        "type": "object",
        "required": ["column", "operator", "value"],
        "properties": {
            "column": {"type": "string", "description": "Column name to filter on"},
            "operator": {
                "type": "string",
                "description": "Operator to use (eq, neq, gt, gte, lt, lte, like, ilike)",
            },
            "value": {"type": "string", "description": "Value to compare against"},
        },
    }
    return {
        "openapi": "3.0.1",
        "info": {
            "title": "Supabase Data Explorer API",
            "description": "API for exploring and querying Supabase database tables",
            "version": "v1",
        },
        "servers": [{"url": f"https://{host}"}, {"url": f"http://{host}"}],
        "paths": {
            "/api/tables": {
                "get": {
                    "operationId": "listTables",
                    "summary": "List all tables in the Supabase database",
                    "responses": {
                        "200": {
                            "description": "List of tables",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "array",
                                        "items": {
                                            "type": "object",
                                            "properties": {
                                                "table_name": {"type": "string"},
                                                "row_count": {"type": "integer"},
                                            },
                                        },
                                    }
                                }
                            },
                        }
                    },
                }
            },
            "/api/query": {
                "post": {
                    "operationId": "queryTable",
                    "summary": "Query a specific table with filters",
                    "requestBody": {
                        "required": True,
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "required": ["tableName"],
                                    "properties": {
                                        "tableName": {
                                            "type": "string",
                                            "description": "Name of the table to query",
                                        },
                                        "columns": {
                                            "type": "string",
                                            "description": "Comma-separated list of columns to select (defaults to *)",
                                        },
                                        "filters": {
                                            "type": "array",
                                            "description": "Filters to apply to the query",
                                            "items": filter_schema,
                                        },
                                        "limit": {
                                            "type": "integer",
                                            "description": "Maximum number of rows to return (defaults to 100)",
                                        },
                                    },
                                }
                            }
                        },
                    },
                    "responses": {
                        "200": {
                            "description": "Query results",
                            "content": {
                                "application/json": {
                                    "schema": {"type": "array", "items": {"type": "object"}}
                                }
                            },
                        }
                    },
                }
            },
        },
    }


def _host(request: Request) -> str:
    return request.headers.get("host") or request.url.netloc


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/")
async def root():
    """Capability description."""
    return {
        "message": "Supabase-ChatGPT API Bridge",
        "description": "API for connecting ChatGPT to Supabase databases",
        "version": __version__,
        "endpoints": {
            "/api/tables": "GET - List all tables",
            "/api/query": "POST - Query table data",
            "/.well-known/ai-plugin.json": "GET - OpenAI plugin manifest",
        },
    }


@router.get("/.well-known/ai-plugin.json")
async def plugin_manifest(request: Request):
    """OpenAI plugin manifest, with URLs on the caller's host."""
    return build_manifest(f"{request.url.scheme}://{_host(request)}")


@router.get("/openapi.yaml")
async def openapi_yaml(request: Request):
    """OpenAPI document for the plugin."""
    body = yaml.safe_dump(build_openapi(_host(request)), sort_keys=False)
    return Response(content=body, media_type="text/yaml")


@router.get("/logo.png")
async def logo():
    """Serve the logo, or 404 if the file is not there."""
    path = get_settings().supabridge_logo_path
    if not path.is_file():
        return PlainTextResponse("Logo not found", status_code=404)
    return FileResponse(path, media_type="image/png")
