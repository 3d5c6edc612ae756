"""Tests for the users endpoints."""

import pytest

from modules.users.models import Role


class TestEnsureUser:
    def test_first_contact_creates_guest(self, client, token_factory):
        headers = {"Authorization": f"Bearer {token_factory(user_id='sub-9', name='Nina')}"}

        response = client.post("/api/users/ensure", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["external_id"] == "sub-9"
        assert data["name"] == "Nina"
        assert data["role"] == "guest"

        me = client.get("/api/users/me", headers=headers).json()
        assert me["effective_role"] == "guest"
        assert "view_public_services" in me["permissions"]


class TestCurrentUser:
    def test_tester_emulation_round_trip(self, client, seed_user):
        headers = seed_user("tess", Role.TESTER)

        response = client.post("/api/users/me/emulation", headers=headers, json={"emulating_role": "worker"})
        assert response.status_code == 200
        assert response.json() == {"success": True}

        me = client.get("/api/users/me", headers=headers).json()
        assert me["effective_role"] == "worker"
        assert me["is_superuser"] is True

        client.post("/api/users/me/emulation", headers=headers, json={"emulating_role": None})
        assert client.get("/api/users/me", headers=headers).json()["effective_role"] == "tester"

    def test_manager_cannot_emulate(self, client, manager_headers):
        response = client.post(
            "/api/users/me/emulation", headers=manager_headers, json={"emulating_role": "guest"}
        )
        assert response.status_code == 403
        assert response.json()["error"] == "EMULATION_NOT_ALLOWED"

    def test_check_permission(self, client, worker_headers):
        allowed = client.get("/api/users/me/permissions/self_assign_shifts", headers=worker_headers)
        denied = client.get("/api/users/me/permissions/manage_user_roles", headers=worker_headers)
        unknown = client.get("/api/users/me/permissions/fly", headers=worker_headers)

        assert allowed.json() == {"action": "self_assign_shifts", "allowed": True}
        assert denied.json()["allowed"] is False
        assert unknown.json()["allowed"] is False


class TestRoleManagement:
    def test_manager_promotes_user(self, client, manager_headers, seed_user):
        seed_user("cara", Role.CUSTOMER)

        response = client.put(
            "/api/users/user-cara/role", headers=manager_headers, json={"new_role": "worker"}
        )

        assert response.status_code == 200
        users = {u["id"]: u for u in client.get("/api/users", headers=manager_headers).json()}
        assert users["user-cara"]["role"] == "worker"

    def test_set_capabilities(self, client, manager_headers, seed_user):
        seed_user("cara", Role.CUSTOMER)

        response = client.put(
            "/api/users/user-cara/capabilities",
            headers=manager_headers,
            json={"capabilities": ["pro", "instructor"]},
        )

        assert response.status_code == 200
        users = {u["id"]: u for u in client.get("/api/users", headers=manager_headers).json()}
        assert sorted(users["user-cara"]["capabilities"]) == ["instructor", "pro"]

    def test_worker_cannot_promote(self, client, worker_headers, seed_user):
        seed_user("cara", Role.CUSTOMER)
        response = client.put(
            "/api/users/user-cara/role", headers=worker_headers, json={"new_role": "manager"}
        )
        assert response.status_code == 403
        assert response.json()["details"]["action"] == "manage_user_roles"

    def test_unknown_target(self, client, manager_headers):
        response = client.put(
            "/api/users/nobody/role", headers=manager_headers, json={"new_role": "worker"}
        )
        assert response.status_code == 404

    def test_invalid_role_value(self, client, manager_headers):
        response = client.put(
            "/api/users/user-manager/role", headers=manager_headers, json={"new_role": "admin"}
        )
        assert response.status_code == 422

    def test_list_users_for_non_manager_is_empty(self, client, worker_headers):
        response = client.get("/api/users", headers=worker_headers)
        assert response.status_code == 200
        assert response.json() == []
