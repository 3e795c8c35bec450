"""
FastAPI dependencies shared by the JSON API and the HTML site.

The store lives on ``app.state`` and is handed to handlers through
these functions, so tests can build an application around any store.
"""

from fastapi import Request

from member_registry_api.app.core.store import MemberStore
from member_registry_api.app.services.member_service import MemberService


def get_store(request: Request) -> MemberStore:
    return request.app.state.store


def get_member_service(request: Request) -> MemberService:
    return MemberService(get_store(request))


async def get_raw_body(request: Request) -> bytes:
    """Read the request body so synchronous handlers can decode it themselves."""
    return await request.body()
