"""
Supabridge - Supabase Plugin Bridge.

Exposes a Supabase (PostgREST) database through a small REST API that a
language-model agent can call:
- /api/tables: List tables with row counts
- /api/query: Filtered table reads
- /.well-known/ai-plugin.json + /openapi.yaml: Plugin manifest and API description
"""

__version__ = "1.0.0"
