"""
Member endpoints for API v1.

These routes expose the member registry as JSON.  Bodies are
``{"name": "..."}``; any ``id`` or ``registration`` in a body is
ignored because both are assigned by the server.  Every response
other than a successful delete is an envelope (see
:mod:`member_registry_api.app.api.responses`).

Handlers are plain functions, so FastAPI runs them in its threadpool
and the blocking store calls never stall the event loop.
"""

import pydantic
from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from member_registry_api.app.api.deps import get_member_service, get_raw_body
from member_registry_api.app.api.responses import members_response
from member_registry_api.app.core.errors import ValidationError
from member_registry_api.app.schemas.member import MemberIn
from member_registry_api.app.services.member_service import MemberService

router = APIRouter()


def parse_member_body(raw: bytes) -> MemberIn:
    """Decode a JSON request body, reporting any failure as a 400."""
    try:
        return MemberIn.model_validate_json(raw or b"")
    except pydantic.ValidationError as exc:
        raise ValidationError(f"failed to parse JSON body with error {exc}") from exc


@router.get("/members/")
def list_members(service: MemberService = Depends(get_member_service)) -> Response:
    """Return every member in the registry."""
    return members_response(service.list_members())


@router.api_route("/member/", methods=["GET", "PUT", "DELETE"], include_in_schema=False)
def missing_member_id() -> Response:
    raise ValidationError("missing id element in request path")


@router.get("/member/{member_id}")
def get_member(member_id: str, service: MemberService = Depends(get_member_service)) -> Response:
    """Return a single member.  Unknown IDs answer 404."""
    member = service.get_member(member_id)
    return members_response({member.id: member})


@router.post("/member/")
def new_member(
    raw: bytes = Depends(get_raw_body),
    service: MemberService = Depends(get_member_service),
) -> Response:
    """Create a member with a fresh UUID and the name from the body."""
    body = parse_member_body(raw)
    member = service.create_member(body.name)
    return members_response({member.id: member})


@router.put("/member/{member_id}")
def update_member(
    member_id: str,
    raw: bytes = Depends(get_raw_body),
    service: MemberService = Depends(get_member_service),
) -> Response:
    """Rename an existing member.

    Unknown IDs answer 404 before the body is looked at; the write
    itself re‑checks existence atomically, so a member deleted in the
    meantime is reported as 404 rather than recreated.
    """
    member_id = service.clean_id(member_id)
    service.require_member(member_id)
    body = parse_member_body(raw)
    member = service.update_member(member_id, body.name)
    return members_response({member.id: member})


@router.delete("/member/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(member_id: str, service: MemberService = Depends(get_member_service)) -> Response:
    """Delete a member.  Unknown IDs answer 404."""
    service.delete_member(member_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
