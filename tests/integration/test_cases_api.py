"""Integration tests for the case HTTP API

Drives the FastAPI app end to end against a seeded SQLite file and checks
the error-kind to status-code mapping.
"""

import pytest

AUTHOR = {"X-User-ID": "user-author"}
PLAYER_ID = "user-player"
COAUTHOR_ID = "user-coauthor"


def _create(client, **body):
    payload = {"title": "Chest pain", "domain": "cardiology", "source": "v1"}
    payload.update(body)
    response = client.post("/api/v1/cases", json=payload, headers=AUTHOR)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.integration
class TestCaseEndpoints:
    """Test create, read, update and delete over HTTP"""

    def test_create_and_get(self, api_client):
        """Happy path: created case is readable with its first version"""
        created = _create(api_client)

        assert created["author_id"] == "user-author"
        assert created["institution"] == "UNICAMP"
        assert created["source"] == "v1"

        response = api_client.get(f"/api/v1/cases/{created['id']}", headers=AUTHOR)

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Chest pain"
        assert body["institution_title"] == "Universidade Estadual de Campinas"
        assert [v["source"] for v in body["versions"]] == ["v1"]

    def test_update_clears_omitted_fields(self, api_client):
        created = _create(api_client)

        response = api_client.put(
            f"/api/v1/cases/{created['id']}",
            json={"title": "Renamed", "source": "v2"},
            headers=AUTHOR,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Renamed"
        assert body["domain"] is None
        assert body["source"] == "v2"
        assert len(body["versions"]) == 2

    def test_delete_then_get_is_not_found(self, api_client):
        created = _create(api_client)

        deleted = api_client.delete(f"/api/v1/cases/{created['id']}", headers=AUTHOR)
        assert deleted.status_code == 200
        assert deleted.json()["id"] == created["id"]

        response = api_client.get(f"/api/v1/cases/{created['id']}", headers=AUTHOR)
        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_missing_case_is_404(self, api_client, method):
        kwargs = {"headers": AUTHOR}
        if method == "put":
            kwargs["json"] = {"source": "v2"}

        response = getattr(api_client, method)("/api/v1/cases/no-such-case", **kwargs)

        assert response.status_code == 404

    def test_missing_user_header_is_401(self, api_client):
        response = api_client.post("/api/v1/cases", json={"source": "v1"})
        assert response.status_code == 401

    def test_unknown_user_is_401(self, api_client):
        response = api_client.get("/api/v1/cases/any", headers={"X-User-ID": "stranger"})
        assert response.status_code == 401

    def test_create_requires_source(self, api_client):
        response = api_client.post("/api/v1/cases", json={"title": "No source"}, headers=AUTHOR)
        assert response.status_code == 422


@pytest.mark.integration
class TestLinkEndpoint:
    """Test sharing over HTTP"""

    def _link(self, client, user_id, case_id, permission, headers=AUTHOR):
        return client.post(
            "/api/v1/cases/link",
            json={"user_id": user_id, "case_id": case_id, "permission": permission},
            headers=headers,
        )

    def test_link_success(self, api_client):
        case = _create(api_client)

        response = self._link(api_client, PLAYER_ID, case["id"], "read")

        assert response.status_code == 200
        assert response.json() == {
            "message": "user and case successfully linked",
            "user_id": PLAYER_ID,
            "case_id": case["id"],
            "permission": "read",
        }

    @pytest.mark.parametrize(
        "user_id, permission, status_code, kind",
        [
            (COAUTHOR_ID, "owner", 400, "invalid_permission"),
            ("user-author", "read", 400, "self_share_rejected"),
            (PLAYER_ID, "write", 403, "role_ineligible"),
            ("no-such-user", "read", 404, "not_found"),
        ],
    )
    def test_link_errors(self, api_client, user_id, permission, status_code, kind):
        case = _create(api_client)

        response = self._link(api_client, user_id, case["id"], permission)

        assert response.status_code == status_code
        detail = response.json()["detail"]
        assert detail["kind"] == kind
        assert detail["message"]

    def test_link_unknown_case(self, api_client):
        response = self._link(api_client, PLAYER_ID, "no-such-case", "read")

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"
