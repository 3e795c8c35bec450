from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from member_registry_api.app.core.config import Settings
from member_registry_api.app.core.store import MemberStore
from member_registry_api.app.main import create_app
from member_registry_api.app.services.member_service import MemberService


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database directory."""
    return Settings(database_dir=str(tmp_path / "data"), database_file="members.db", log_level="WARNING")


@pytest.fixture
def store(settings: Settings) -> MemberStore:
    store = MemberStore(settings.database_path, settings.bucket)
    store.ensure_bucket()
    return store


@pytest.fixture
def service(store: MemberStore) -> MemberService:
    return MemberService(store)


@pytest.fixture
def app(settings: Settings, store: MemberStore) -> FastAPI:
    return create_app(settings, store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client
