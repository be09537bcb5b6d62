"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Postgres/pgvector, Gemini,
Google Cloud speech). Provides adapters and clients for infrastructure
dependencies.
"""
