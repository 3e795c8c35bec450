"""
Envelope rendering and error handling for the JSON API.

Every JSON response body is an :class:`Envelope`.  Successful
responses carry ``results`` and failures carry ``error``; the two are
never present together.
"""

import logging
from typing import Dict

from fastapi import Request, status
from fastapi.responses import Response

from member_registry_api.app.core.errors import (
    EncodingError,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from member_registry_api.app.schemas.member import Envelope, Member


logger = logging.getLogger(__name__)


def envelope_response(envelope: Envelope, status_code: int = status.HTTP_200_OK) -> Response:
    """Serialize ``envelope`` into a JSON response.

    Raises :class:`EncodingError` if the payload cannot be serialized.
    """
    try:
        payload = envelope.model_dump_json(by_alias=True, exclude_none=True)
    except ValueError as exc:
        raise EncodingError(f"failed to encode response payload: {exc}") from exc
    return Response(content=payload, status_code=status_code, media_type="application/json")


def members_response(members: Dict[str, Member]) -> Response:
    return envelope_response(Envelope.success(members))


async def registry_error_handler(request: Request, exc: RegistryError) -> Response:
    """Turn a :class:`RegistryError` into an error envelope."""
    if isinstance(exc, (ValidationError, NotFoundError)):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    else:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    try:
        return envelope_response(Envelope.failure(exc.status_code, exc.message), exc.status_code)
    except EncodingError as encode_exc:
        logger.error("Dropping error response body: %s", encode_exc.message)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
