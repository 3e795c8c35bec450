"""
HTML form endpoints.

``GET /`` lists every member (``?id=`` opens the edit form for one of
them).  ``POST /new``, ``POST /update`` and ``POST /delete`` take
url‑encoded form fields, perform the change and answer with a
``303 See Other`` back to ``/``, so the browser re‑reads the listing.
Deleting from the site is idempotent: an ID that is already gone still
redirects.
"""

import logging
from typing import Dict, Optional
from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from member_registry_api.app.api.deps import get_member_service, get_raw_body
from member_registry_api.app.core.errors import NotFoundError, RegistryError, ValidationError
from member_registry_api.app.services.member_service import MemberService
from member_registry_api.app.site.templates import TemplateRenderer


logger = logging.getLogger(__name__)

router = APIRouter()


def get_renderer(request: Request) -> TemplateRenderer:
    return request.app.state.renderer


def parse_form(raw: bytes) -> Dict[str, str]:
    """Decode an url‑encoded body, keeping the first value of each field."""
    fields = parse_qs(raw.decode("utf-8", errors="replace"), keep_blank_values=True)
    return {key: values[0] for key, values in fields.items() if values}


def form_value(request: Request, form: Dict[str, str], key: str) -> str:
    """Form field value, falling back to the query string."""
    if key in form:
        return form[key]
    return request.query_params.get(key, "")


def error_page(renderer: TemplateRenderer, exc: RegistryError) -> HTMLResponse:
    if isinstance(exc, (ValidationError, NotFoundError)):
        logger.info("Site request rejected (%s): %s", exc.status_code, exc.message)
    else:
        logger.error("Site request failed: %s", exc.message)
    return HTMLResponse(renderer.render_error(exc.status_code, exc.message), status_code=exc.status_code)


def back_to_index() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/", response_class=HTMLResponse, name="index")
def index(
    id: Optional[str] = None,
    service: MemberService = Depends(get_member_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> Response:
    try:
        members = service.list_members()
    except RegistryError as exc:
        return error_page(renderer, exc)
    selected = members.get(id.strip()) if id else None
    return HTMLResponse(renderer.render_index(members, selected))


@router.post("/new")
def new_member(
    request: Request,
    raw: bytes = Depends(get_raw_body),
    service: MemberService = Depends(get_member_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> Response:
    form = parse_form(raw)
    try:
        service.create_member(form_value(request, form, "name"))
    except RegistryError as exc:
        return error_page(renderer, exc)
    return back_to_index()


@router.post("/update")
def update_member(
    request: Request,
    raw: bytes = Depends(get_raw_body),
    service: MemberService = Depends(get_member_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> Response:
    form = parse_form(raw)
    try:
        service.update_member(form_value(request, form, "id"), form_value(request, form, "name"))
    except RegistryError as exc:
        return error_page(renderer, exc)
    return back_to_index()


@router.post("/delete")
def delete_member(
    request: Request,
    raw: bytes = Depends(get_raw_body),
    service: MemberService = Depends(get_member_service),
    renderer: TemplateRenderer = Depends(get_renderer),
) -> Response:
    form = parse_form(raw)
    try:
        service.delete_member(form_value(request, form, "id"), missing_ok=True)
    except RegistryError as exc:
        return error_page(renderer, exc)
    return back_to_index()
