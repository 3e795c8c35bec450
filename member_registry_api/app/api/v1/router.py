"""
Top‑level router for version 1 of the API.

Aggregates resource routers under a unified prefix.  The application
factory mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import members

router = APIRouter()

router.include_router(members.router, tags=["members"])
