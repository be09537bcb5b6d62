"""HTTP API: routers, dependencies and exception handlers."""
