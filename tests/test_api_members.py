"""
Tests for the JSON member API.

Exercises every route, the envelope contract (``results`` xor
``error``, always a ``timestamp``) and the status codes.
"""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from member_registry_api.app.core.config import Settings
from member_registry_api.app.core.store import MemberStore
from member_registry_api.app.main import create_app


def _create(client: TestClient, name: str = "Ada") -> dict:
    response = client.post("/api/member/", json={"name": name})
    assert response.status_code == 200
    (member,) = response.json()["results"].values()
    return member


def _assert_error(response, code: int) -> dict:
    assert response.status_code == code
    data = response.json()
    assert "results" not in data
    assert data["error"]["code"] == code
    assert data["error"]["message"]
    assert "timestamp" in data
    return data


# --- Scenario ---


def test_create_get_delete_scenario(client: TestClient) -> None:
    """Create Ada, read her back, delete her, and get 404 afterwards."""
    response = client.post("/api/member/", json={"name": "Ada"})
    assert response.status_code == 200
    data = response.json()
    assert "error" not in data
    assert "timestamp" in data
    (member_id,) = data["results"].keys()
    member = data["results"][member_id]
    assert member["id"] == member_id
    assert member["name"] == "Ada"

    response = client.get(f"/api/member/{member_id}")
    assert response.status_code == 200
    assert response.json()["results"] == {member_id: member}

    response = client.delete(f"/api/member/{member_id}")
    assert response.status_code == 204
    assert response.content == b""

    data = _assert_error(client.get(f"/api/member/{member_id}"), 404)
    assert member_id in data["error"]["message"]


# --- Create ---


class TestCreateMember:
    def test_client_id_is_ignored(self, client: TestClient) -> None:
        member = _create_with_body(client, {"id": "chosen-by-client", "name": "Ada"})
        assert member["id"] != "chosen-by-client"
        uuid.UUID(member["id"])

    def test_registration_is_server_assigned(self, client: TestClient) -> None:
        member = _create_with_body(client, {"name": "Ada", "registration": "1999-01-01T00:00:00Z"})
        assert not member["registration"].startswith("1999")

    def test_blank_name(self, client: TestClient, store: MemberStore) -> None:
        _assert_error(client.post("/api/member/", json={"name": "   "}), 400)
        _assert_error(client.post("/api/member/", json={}), 400)
        assert store.list() == {}

    def test_malformed_body(self, client: TestClient, store: MemberStore) -> None:
        _assert_error(client.post("/api/member/", content=b"{not json"), 400)
        _assert_error(client.post("/api/member/", content=b""), 400)
        _assert_error(client.post("/api/member/", json=["Ada"]), 400)
        _assert_error(client.post("/api/member/", json={"name": 42}), 400)
        assert store.list() == {}


def _create_with_body(client: TestClient, body: dict) -> dict:
    response = client.post("/api/member/", json=body)
    assert response.status_code == 200
    (member,) = response.json()["results"].values()
    return member


# --- List / get ---


class TestReadMembers:
    def test_list_empty(self, client: TestClient) -> None:
        response = client.get("/api/members/")
        assert response.status_code == 200
        assert response.json()["results"] == {}

    def test_list_all(self, client: TestClient) -> None:
        created = [_create(client, name) for name in ("Ada", "Grace", "Linus")]
        results = client.get("/api/members/").json()["results"]
        assert set(results) == {m["id"] for m in created}
        assert {m["name"] for m in results.values()} == {"Ada", "Grace", "Linus"}

    def test_get_unknown(self, client: TestClient) -> None:
        _assert_error(client.get("/api/member/does-not-exist"), 404)

    def test_missing_id(self, client: TestClient) -> None:
        _assert_error(client.get("/api/member/"), 400)
        _assert_error(client.put("/api/member/", json={"name": "Ada"}), 400)
        _assert_error(client.delete("/api/member/"), 400)

    def test_blank_id(self, client: TestClient) -> None:
        _assert_error(client.get("/api/member/%20"), 400)


# --- Update ---


class TestUpdateMember:
    def test_update_renames(self, client: TestClient) -> None:
        member = _create(client)
        response = client.put(f"/api/member/{member['id']}", json={"name": "Grace"})
        assert response.status_code == 200
        updated = response.json()["results"][member["id"]]
        assert updated["name"] == "Grace"
        assert updated["registration"] == member["registration"]
        fetched = client.get(f"/api/member/{member['id']}").json()["results"][member["id"]]
        assert fetched == updated

    def test_update_ignores_body_id(self, client: TestClient) -> None:
        member = _create(client)
        response = client.put(f"/api/member/{member['id']}", json={"id": "other", "name": "Grace"})
        assert response.status_code == 200
        assert list(response.json()["results"]) == [member["id"]]
        _assert_error(client.get("/api/member/other"), 404)

    def test_update_absent_is_404_and_not_created(self, client: TestClient, store: MemberStore) -> None:
        _assert_error(client.put("/api/member/ghost", json={"name": "Ada"}), 404)
        assert store.exists("ghost") is False

    def test_update_absent_with_bad_body_is_404(self, client: TestClient) -> None:
        _assert_error(client.put("/api/member/ghost", content=b"{not json"), 404)

    def test_update_bad_body(self, client: TestClient) -> None:
        member = _create(client)
        _assert_error(client.put(f"/api/member/{member['id']}", content=b"nope"), 400)
        _assert_error(client.put(f"/api/member/{member['id']}", json={"name": ""}), 400)
        fetched = client.get(f"/api/member/{member['id']}").json()["results"][member["id"]]
        assert fetched["name"] == "Ada"


# --- Delete ---


class TestDeleteMember:
    def test_delete_unknown(self, client: TestClient) -> None:
        _assert_error(client.delete("/api/member/ghost"), 404)

    def test_delete_leaves_others(self, client: TestClient) -> None:
        keep = _create(client, "Ada")
        drop = _create(client, "Grace")
        assert client.delete(f"/api/member/{drop['id']}").status_code == 204
        assert list(client.get("/api/members/").json()["results"]) == [keep["id"]]


# --- Storage failures ---


class TestStorageFailures:
    def test_list_with_unreadable_database(self, tmp_path) -> None:
        settings = Settings(database_dir=str(tmp_path), log_level="WARNING")
        store = MemberStore(str(tmp_path / "missing-dir" / "members.db"))
        # Without the lifespan the directory is never created.
        client = TestClient(create_app(settings, store))
        _assert_error(client.get("/api/members/"), 500)
        _assert_error(client.post("/api/member/", json={"name": "Ada"}), 500)

    def test_get_undecodable_record(self, client: TestClient, store: MemberStore) -> None:
        with store.transaction(write=True) as cursor:
            cursor.execute('INSERT INTO "members" (key, value) VALUES (?, ?)', ("bad", "{oops"))
        _assert_error(client.get("/api/member/bad"), 500)
        assert client.get("/api/members/").json()["results"] == {}
