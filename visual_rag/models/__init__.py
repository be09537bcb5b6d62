"""
API data models.

Pydantic request/response schemas for the HTTP interface.
"""
