"""
Supabridge Web - HTTP surface (FastAPI).
"""
