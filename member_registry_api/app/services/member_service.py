"""
Service layer for members.

``MemberService`` holds the operations both front‑ends perform on top
of the record store.  It assigns IDs and registration times on
creation, validates names, keeps ``id`` and ``registration_time``
immutable on update and turns absent records into
:class:`NotFoundError`.  Handlers never talk to the store directly.

Names are stored trimmed.  A blank ID is rejected before the store is
consulted.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from member_registry_api.app.core.errors import NotFoundError, ValidationError
from member_registry_api.app.core.store import MemberStore
from member_registry_api.app.schemas.member import Member


logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemberService:
    """Member operations over an injected :class:`MemberStore`."""

    def __init__(
        self,
        store: MemberStore,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    @staticmethod
    def clean_id(member_id: Optional[str]) -> str:
        """Return the trimmed ID or raise if it is missing."""
        cleaned = (member_id or "").strip()
        if not cleaned:
            raise ValidationError("missing or empty id field in request")
        return cleaned

    @staticmethod
    def clean_name(name: Optional[str]) -> str:
        """Return the trimmed name or raise if it is blank."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("missing or empty name field in request")
        return cleaned

    def list_members(self) -> Dict[str, Member]:
        return self.store.list()

    def get_member(self, member_id: Optional[str]) -> Member:
        member_id = self.clean_id(member_id)
        member = self.store.get(member_id)
        if member is None:
            raise NotFoundError(member_id)
        return member

    def require_member(self, member_id: Optional[str]) -> None:
        """Raise :class:`NotFoundError` unless the ID is present in the store."""
        member_id = self.clean_id(member_id)
        if not self.store.exists(member_id):
            raise NotFoundError(member_id)

    def create_member(self, name: Optional[str]) -> Member:
        """Create a member with a fresh server‑assigned ID."""
        member = Member(
            id=self.id_factory(),
            name=self.clean_name(name),
            registration_time=self.clock(),
        )
        self.store.put(member)
        logger.info("Created member %s", member.id)
        return member

    def update_member(self, member_id: Optional[str], name: Optional[str]) -> Member:
        """Rename an existing member.

        The existence check and the write happen in one store
        transaction; an absent ID raises :class:`NotFoundError` and no
        record is created.
        """
        member_id = self.clean_id(member_id)
        new_name = self.clean_name(name)
        updated = self.store.modify(
            member_id, lambda current: current.model_copy(update={"name": new_name})
        )
        if updated is None:
            raise NotFoundError(member_id)
        logger.info("Updated member %s", member_id)
        return updated

    def delete_member(self, member_id: Optional[str], missing_ok: bool = False) -> None:
        """Delete a member.

        Unless ``missing_ok`` is set, deleting an absent ID raises
        :class:`NotFoundError`.  The store operation itself is always
        idempotent.
        """
        member_id = self.clean_id(member_id)
        removed = self.store.delete(member_id)
        if not removed and not missing_ok:
            raise NotFoundError(member_id)
        if removed:
            logger.info("Deleted member %s", member_id)
