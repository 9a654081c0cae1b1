"""펫 API 통합 테스트

TestClient + in-memory SQLite. 소유자는 owner_id 쿠키로 식별.
"""

from fastapi.testclient import TestClient


def _create(client, name="Rex", kind="dog"):
    resp = client.post("/pets", json={"name": name, "kind": kind})
    assert resp.status_code == 200, resp.text
    return resp.json()


class TestCreate:
    def test_create_defaults(self, client):
        data = _create(client)
        assert data["owner_id"] == "owner-1"
        assert data["kind"] == "dog"
        assert data["health"] == 100
        assert data["coins"] == 0

    def test_issues_owner_cookie(self, app):
        anon = TestClient(app)
        resp = anon.post("/pets", json={"name": "Rex", "kind": "dog"})
        assert resp.status_code == 200
        owner_id = resp.json()["owner_id"]
        assert f"owner_id={owner_id}" in resp.headers["set-cookie"]

    def test_invalid_kind(self, client):
        resp = client.post("/pets", json={"name": "Puff", "kind": "dragon"})
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "error": "INVALID_PET_KIND",
            "detail": "Unknown pet kind: 'dragon'",
        }

    def test_blank_name(self, client):
        resp = client.post("/pets", json={"name": "   ", "kind": "dog"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "INVALID_NAME"

    def test_duplicate_kind(self, client):
        _create(client)
        resp = client.post("/pets", json={"name": "Max", "kind": "dog"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "DUPLICATE_PET_KIND"

    def test_limit(self, client):
        for name, kind in [("Rex", "dog"), ("Mimi", "cat"), ("Momo", "monkey")]:
            _create(client, name, kind)
        assert len(client.get("/pets").json()) == 3


class TestReadDelete:
    def test_get(self, client):
        pet = _create(client)
        resp = client.get(f"/pets/{pet['id']}")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Rex"

    def test_get_missing(self, client):
        resp = client.get("/pets/nope")
        assert resp.status_code == 404
        assert resp.json()["error"] == "PET_NOT_FOUND"

    def test_other_owner_cannot_see(self, client, app):
        pet = _create(client)
        other = TestClient(app)
        other.cookies.set("owner_id", "owner-2")
        assert other.get(f"/pets/{pet['id']}").status_code == 404
        assert other.get("/pets").json() == []
        assert other.post(f"/pets/{pet['id']}/actions/feed").status_code == 404

    def test_delete(self, client):
        pet = _create(client)
        resp = client.delete(f"/pets/{pet['id']}")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "data": {"pet_id": pet["id"]}}
        assert client.get(f"/pets/{pet['id']}").status_code == 404


class TestActions:
    def test_play(self, client):
        pet = _create(client)
        resp = client.post(f"/pets/{pet['id']}/actions/play")
        assert resp.status_code == 200
        data = resp.json()
        assert (data["happiness"], data["energy"], data["hunger"]) == (20, 0, 10)

    def test_state_persists_between_requests(self, client):
        pet = _create(client)
        client.post(f"/pets/{pet['id']}/actions/play")
        data = client.post(f"/pets/{pet['id']}/actions/feed").json()
        assert data["hunger"] == 0
        assert data["coins"] == 15

    def test_unknown_action(self, client):
        pet = _create(client)
        resp = client.post(f"/pets/{pet['id']}/actions/dance")
        assert resp.status_code == 400
        assert resp.json()["error"] == "UNKNOWN_ACTION"


class TestFinishGame:
    def test_finish_game(self, client):
        pet = _create(client)
        resp = client.post(
            f"/pets/{pet['id']}/finish-game", json={"score": 250, "coins_earned": 40}
        )
        assert resp.status_code == 200
        assert resp.json()["coins"] == 40

    def test_negative_coins(self, client):
        pet = _create(client)
        resp = client.post(
            f"/pets/{pet['id']}/finish-game", json={"score": 1, "coins_earned": -5}
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "INVALID_GAME_RESULT"
