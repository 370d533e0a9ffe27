"""API resource tests."""

from uuid import uuid4

from falcon.testing import TestClient


def bearer(user_id: str) -> dict[str, str]:
    """Auth header; the test Keycloak provider treats the token as the user id."""
    return {"Authorization": f"Bearer {user_id}"}


RULE = {
    "name": "platform staff read reports",
    "resource_type": "report",
    "action": "read",
    "effect": "allow",
    "priority": 10,
    "conditions": [{"field": "user.role", "operator": "equals", "value": "SUPER_ADMIN"}],
}


class TestAuthentication:
    def test_health_is_public(self, client: TestClient) -> None:
        assert client.simulate_get("/v1/health").status_code == 200

    def test_missing_token(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/me/permissions")
        assert result.status_code == 401
        assert result.json == {
            "error": "UNAUTHENTICATED",
            "message": "Authentication required",
            "status": 401,
        }

    def test_rejected_token(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/me/permissions", headers=bearer("invalid"))
        assert result.status_code == 401

    def test_unknown_subject(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/me/permissions", headers=bearer("nobody"))
        assert result.status_code == 401


class TestPermissions:
    def test_my_permissions(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/me/permissions", headers=bearer("user1"))
        assert result.status_code == 200
        assert result.json["user_id"] == "user1"
        assert "view_company_data" in result.json["permissions"]
        assert {i["source"] for i in result.json["inherited"]} == {"role"}

    def test_manager_views_company_user(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/user1/permissions", headers=bearer("mgr1"))
        assert result.status_code == 200

    def test_cross_company_view_denied(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/user1/permissions", headers=bearer("user2"))
        assert result.status_code == 403
        assert result.json["error"] == "RESOURCE_ACCESS_DENIED"
        assert result.json["resource_type"] == "user"
        assert result.json["resource_id"] == "user1"

    def test_unknown_user(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/users/ghost/permissions", headers=bearer("root"))
        assert result.status_code == 404
        assert result.json["error"] == "NOT_FOUND"

    def test_assign_and_revoke(self, client: TestClient) -> None:
        body = {"permissions": ["view_company_analytics"]}
        assigned = client.simulate_post(
            "/v1/users/user1/permissions", json=body, headers=bearer("admin1")
        )
        assert assigned.status_code == 200
        assert assigned.json["permissions"] == ["view_company_analytics"]

        revoked = client.simulate_delete(
            "/v1/users/user1/permissions", json=body, headers=bearer("admin1")
        )
        assert revoked.status_code == 200
        assert revoked.json["permissions"] == []

    def test_assign_unknown_permission(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/users/user1/permissions",
            json={"permissions": ["fly"]},
            headers=bearer("admin1"),
        )
        assert result.status_code == 400
        assert result.json["error"] == "INVALID_INPUT"

    def test_assign_without_grant_right(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/users/user1/permissions",
            json={"permissions": ["create_journal"]},
            headers=bearer("mgr1"),
        )
        assert result.status_code == 403
        assert result.json["error"] == "PERMISSION_DENIED"

    def test_bulk_permissions_body_checked(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/bulk/permissions",
            json={"user_ids": "user1", "permissions": ["create_journal"]},
            headers=bearer("admin1"),
        )
        assert result.status_code == 400


class TestRoles:
    def test_update_role(self, client: TestClient) -> None:
        result = client.simulate_put(
            "/v1/users/user1/role", json={"role": "COMPANY_MANAGER"}, headers=bearer("admin1")
        )
        assert result.status_code == 200
        assert result.json["role"] == "COMPANY_MANAGER"
        assert "manage_departments" in result.json["permissions"]

    def test_update_role_other_company(self, client: TestClient) -> None:
        result = client.simulate_put(
            "/v1/users/user2/role", json={"role": "COMPANY_MANAGER"}, headers=bearer("admin1")
        )
        assert result.status_code == 403

    def test_update_role_invalid_role(self, client: TestClient) -> None:
        result = client.simulate_put(
            "/v1/users/user1/role", json={"role": "OWNER"}, headers=bearer("admin1")
        )
        assert result.status_code == 400

    def test_update_role_empty_body(self, client: TestClient) -> None:
        result = client.simulate_put("/v1/users/user1/role", headers=bearer("admin1"))
        assert result.status_code == 400

    def test_inactive_caller(self, client: TestClient) -> None:
        result = client.simulate_put(
            "/v1/users/user1/role", json={"role": "COMPANY_MANAGER"}, headers=bearer("gone")
        )
        assert result.status_code == 403
        assert result.json["error"] == "INACTIVE_ACTOR"

    def test_bulk_role(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/bulk/role",
            json={"user_ids": ["mgr1", "user1"], "role": "COMPANY_USER"},
            headers=bearer("admin1"),
        )
        assert result.status_code == 200
        assert [u["role"] for u in result.json["items"]] == ["COMPANY_USER", "COMPANY_USER"]

    def test_assignable_roles(self, client: TestClient) -> None:
        admin = client.simulate_get("/v1/roles/assignable", headers=bearer("admin1"))
        user = client.simulate_get("/v1/roles/assignable", headers=bearer("user1"))
        assert [i["role"] for i in admin.json["items"]] == [
            "COMPANY_ADMIN",
            "COMPANY_MANAGER",
            "COMPANY_USER",
        ]
        assert admin.json["items"][0]["level"] == 4
        assert user.json["items"] == []


class TestRules:
    def test_requires_manage_platform(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/rules", headers=bearer("admin1"))
        assert result.status_code == 403
        assert result.json["permissions"] == ["manage_platform"]

    def test_crud(self, client: TestClient) -> None:
        created = client.simulate_post("/v1/rules", json=RULE, headers=bearer("root"))
        assert created.status_code == 201
        rule_id = created.json["id"]
        assert created.json["created_by"] == "root"

        listed = client.simulate_get(
            "/v1/rules", params={"resource_type": "report"}, headers=bearer("root")
        )
        assert [r["id"] for r in listed.json["items"]] == [rule_id]

        updated = client.simulate_put(
            f"/v1/rules/{rule_id}", json={**RULE, "priority": 1}, headers=bearer("root")
        )
        assert updated.status_code == 200
        assert updated.json["priority"] == 1

        fetched = client.simulate_get(f"/v1/rules/{rule_id}", headers=bearer("root"))
        assert fetched.json["priority"] == 1

        deleted = client.simulate_delete(f"/v1/rules/{rule_id}", headers=bearer("root"))
        assert deleted.status_code == 204
        missing = client.simulate_get(f"/v1/rules/{rule_id}", headers=bearer("root"))
        assert missing.status_code == 404

    def test_invalid_rule_payload(self, client: TestClient) -> None:
        payload = {**RULE, "effect": "maybe"}
        result = client.simulate_post("/v1/rules", json=payload, headers=bearer("root"))
        assert result.status_code == 400

    def test_malformed_conditions(self, client: TestClient) -> None:
        payload = {**RULE, "conditions": ["oops"]}
        result = client.simulate_post("/v1/rules", json=payload, headers=bearer("root"))
        assert result.status_code == 400
        assert result.json["error"] == "INVALID_INPUT"

    def test_malformed_id_in_body(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/rules", json={**RULE, "id": "nope"}, headers=bearer("root")
        )
        assert result.status_code == 400

    def test_invalid_rule_id(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/rules/not-a-uuid", headers=bearer("root"))
        assert result.status_code == 400
        assert result.json["message"] == "Invalid rule ID"

    def test_evaluate(self, client: TestClient) -> None:
        rule_id = client.simulate_post("/v1/rules", json=RULE, headers=bearer("root")).json["id"]
        resource = {"id": "rep-1", "type": "report"}

        as_caller = client.simulate_post(
            f"/v1/rules/{rule_id}/evaluate", json={"resource": resource}, headers=bearer("root")
        )
        as_other = client.simulate_post(
            f"/v1/rules/{rule_id}/evaluate",
            json={"user": {"id": "x", "role": "COMPANY_USER"}, "resource": resource},
            headers=bearer("root"),
        )

        assert as_caller.json == {"rule_id": rule_id, "result": True}
        assert as_other.json["result"] is False

    def test_evaluate_unknown_rule(self, client: TestClient) -> None:
        result = client.simulate_post(
            f"/v1/rules/{uuid4()}/evaluate", json={}, headers=bearer("root")
        )
        assert result.status_code == 404


class TestTemplates:
    def test_create_list_apply(self, client: TestClient) -> None:
        created = client.simulate_post(
            "/v1/templates",
            json={"name": "Analyst", "permissions": ["view_company_analytics"]},
            headers=bearer("root"),
        )
        assert created.status_code == 201
        template_id = created.json["id"]

        listed = client.simulate_get("/v1/templates", headers=bearer("admin1"))
        assert [t["name"] for t in listed.json["items"]] == ["Analyst"]

        applied = client.simulate_post(
            f"/v1/users/user1/templates/{template_id}", headers=bearer("admin1")
        )
        assert applied.status_code == 200
        assert "view_company_analytics" in applied.json["permissions"]

    def test_list_requires_user_management(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/templates", headers=bearer("user1"))
        assert result.status_code == 403

    def test_create_requires_manage_platform(self, client: TestClient) -> None:
        result = client.simulate_post(
            "/v1/templates",
            json={"name": "Mine", "permissions": []},
            headers=bearer("admin1"),
        )
        assert result.status_code == 403


class TestAudit:
    def test_non_platform_actor_sees_own_entries(self, client: TestClient) -> None:
        client.simulate_get("/v1/users/user1/permissions", headers=bearer("user2"))

        result = client.simulate_get(
            "/v1/audit", params={"user_id": "user2"}, headers=bearer("user1")
        )

        assert result.status_code == 200
        assert result.json["items"]
        assert {e["user_id"] for e in result.json["items"]} == {"user1"}

    def test_platform_filters(self, client: TestClient) -> None:
        client.simulate_get("/v1/users/user1/permissions", headers=bearer("user2"))

        result = client.simulate_get(
            "/v1/audit",
            params={"user_id": "user2", "result": "false"},
            headers=bearer("root"),
        )

        items = result.json["items"]
        assert items
        assert all(e["user_id"] == "user2" and e["result"] is False for e in items)

    def test_invalid_limit(self, client: TestClient) -> None:
        result = client.simulate_get("/v1/audit", params={"limit": "0"}, headers=bearer("root"))
        assert result.status_code == 400

    def test_invalid_timestamp(self, client: TestClient) -> None:
        result = client.simulate_get(
            "/v1/audit", params={"start": "yesterday"}, headers=bearer("root")
        )
        assert result.status_code == 400
