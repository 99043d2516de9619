"""Token verification, degraded mode and the role / ownership guards."""

import pytest

from skillsage.auth.identity import IdentityProvider
from skillsage.auth.verification import IdentityVerifier
from skillsage.core.config import Settings
from skillsage.core.errors import Forbidden, ProviderUnavailable, Unauthenticated
from skillsage.core.policy import FailurePolicy
from skillsage.core.roles import ROLE_CAPABILITIES, Capability, Role
from tests.conftest import ADMIN_UID, MENTOR_UID, STUDENT_UID, TOKENS, StaticIdentityProvider, build_client


class BrokenIdentityProvider(IdentityProvider):
    async def verify(self, token):
        raise RuntimeError("certificate fetch timed out")


class TestIdentityVerifier:
    @pytest.fixture
    def verifier(self, storage):
        return IdentityVerifier(StaticIdentityProvider(TOKENS), storage)

    async def test_missing_header(self, verifier):
        with pytest.raises(Unauthenticated):
            await verifier.resolve(None)

    async def test_non_bearer_header(self, verifier):
        with pytest.raises(Unauthenticated):
            await verifier.resolve("Basic c3R1ZGVudDpzZWNyZXQ=")

    async def test_invalid_token(self, verifier):
        with pytest.raises(Forbidden) as exc_info:
            await verifier.resolve("Bearer forged-token")
        assert exc_info.value.message == "Forbidden: Invalid token"

    async def test_stored_role_is_used(self, verifier):
        principal = await verifier.resolve("Bearer mentor-token")
        assert principal.uid == MENTOR_UID
        assert principal.role == Role.MENTOR

    async def test_unknown_subject_gets_least_privileged_role(self, verifier):
        principal = await verifier.resolve("Bearer newcomer-token")
        assert principal.role == Role.USER
        assert principal.email == "alan@skillsage.io"

    async def test_deactivated_user_rejected(self, verifier, storage):
        await storage.update_user(STUDENT_UID, {"is_active": False})
        with pytest.raises(Forbidden) as exc_info:
            await verifier.resolve("Bearer student-token")
        assert exc_info.value.message == "Forbidden: Account is deactivated"

    def test_bypass_cannot_be_combined_with_provider(self, storage):
        with pytest.raises(ValueError):
            IdentityVerifier(StaticIdentityProvider(TOKENS), storage, bypass=True)

    async def test_provider_error_fails_fast(self, storage):
        verifier = IdentityVerifier(BrokenIdentityProvider(), storage)
        assert verifier.policy == FailurePolicy.FAIL_FAST
        with pytest.raises(ProviderUnavailable) as exc_info:
            await verifier.resolve("Bearer student-token")
        assert exc_info.value.message == "Identity provider failed"

    async def test_provider_error_degrades_to_rejection(self, storage):
        verifier = IdentityVerifier(BrokenIdentityProvider(), storage, policy=FailurePolicy.DEGRADE)
        with pytest.raises(Forbidden) as exc_info:
            await verifier.resolve("Bearer student-token")
        assert exc_info.value.message == "Forbidden: Invalid token"


class TestDegradedMode:
    async def test_bypass_only_in_development(self, storage):
        verifier = IdentityVerifier.from_settings(Settings(ENVIRONMENT="development"), None, storage)
        principal = await verifier.resolve(None)
        assert verifier.bypass is True
        assert principal.role == Role.ADMIN
        assert principal.uid == "dev-user"

    @pytest.mark.parametrize("environment", ["test", "production"])
    async def test_fails_closed_elsewhere(self, storage, environment):
        verifier = IdentityVerifier.from_settings(Settings(ENVIRONMENT=environment), None, storage)
        assert verifier.bypass is False
        with pytest.raises(ProviderUnavailable):
            await verifier.resolve("Bearer student-token")

    async def test_configured_provider_never_bypasses(self, storage):
        verifier = IdentityVerifier.from_settings(
            Settings(ENVIRONMENT="development"), StaticIdentityProvider(TOKENS), storage
        )
        with pytest.raises(Unauthenticated):
            await verifier.resolve(None)

    async def test_unconfigured_app_returns_503(self, settings, storage, ai_gateway):
        async with build_client(settings, storage, ai_gateway) as client:
            response = await client.get("/api/auth/me", headers={"Authorization": "Bearer student-token"})
        assert response.status_code == 503
        assert response.json() == {"message": "Identity provider is not configured"}

    async def test_provider_error_returns_503(self, settings, storage, ai_gateway):
        async with build_client(settings, storage, ai_gateway, BrokenIdentityProvider()) as client:
            response = await client.get("/api/auth/me", headers={"Authorization": "Bearer student-token"})
        assert response.status_code == 503
        assert response.json() == {"message": "Identity provider failed"}

    async def test_public_routes_work_without_provider(self, settings, storage, ai_gateway):
        async with build_client(settings, storage, ai_gateway) as client:
            response = await client.get("/api/courses")
        assert response.status_code == 200


class TestAuthEndpoints:
    async def test_no_token(self, client):
        response = await client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized: No token provided"}

    async def test_invalid_token(self, client):
        response = await client.get("/api/auth/me", headers={"Authorization": "Bearer forged-token"})
        assert response.status_code == 403
        assert response.json()["message"] == "Forbidden: Invalid token"

    async def test_me(self, client, mentor_headers):
        response = await client.get("/api/auth/me", headers=mentor_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["uid"] == MENTOR_UID
        assert data["role"] == "mentor"
        assert data["user"]["name"] == "Grace Hopper"

    async def test_me_before_bootstrap(self, client, newcomer_headers):
        response = await client.get("/api/auth/me", headers=newcomer_headers)
        assert response.status_code == 200
        assert response.json()["user"] is None
        assert response.json()["role"] == "user"


class TestRoleGuard:
    async def test_admin_route_rejects_member(self, client, student_headers):
        response = await client.get("/api/admin/stats", headers=student_headers)
        assert response.status_code == 403
        assert response.json() == {
            "message": "Forbidden: Insufficient role",
            "required": ["admin"],
            "current": "student",
        }

    async def test_admin_route_reports_mentor_role(self, client, mentor_headers):
        response = await client.get("/api/admin/users", headers=mentor_headers)
        assert response.status_code == 403
        assert response.json()["current"] == "mentor"

    async def test_admin_route_allows_admin(self, client, admin_headers):
        response = await client.get("/api/admin/stats", headers=admin_headers)
        assert response.status_code == 200

    async def test_ai_tools_follow_role_table(self, client, monkeypatch, mentor_headers):
        monkeypatch.setitem(ROLE_CAPABILITIES, Role.MENTOR, frozenset({Capability.USE_PLATFORM}))

        response = await client.post("/api/chat", json={"message": "hello"}, headers=mentor_headers)
        assert response.status_code == 403
        assert response.json() == {
            "message": "Forbidden: Insufficient role",
            "required": ["admin", "student", "user"],
            "current": "mentor",
        }

        response = await client.get("/api/auth/me", headers=mentor_headers)
        assert response.status_code == 200

    async def test_platform_routes_follow_role_table(self, client, monkeypatch, student_headers):
        monkeypatch.setitem(ROLE_CAPABILITIES, Role.STUDENT, frozenset())
        response = await client.post("/api/resume/parse", json={"content": "text"}, headers=student_headers)
        assert response.status_code == 403
        assert response.json()["current"] == "student"


class TestOwnershipGuard:
    async def test_owner_can_read(self, client, student_headers):
        response = await client.get(f"/api/user/{STUDENT_UID}", headers=student_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "ada@skillsage.io"

    async def test_other_user_rejected(self, client, student_headers):
        response = await client.get(f"/api/user/{MENTOR_UID}", headers=student_headers)
        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden: You can only access your own data"}

    async def test_admin_can_read_anyone(self, client, admin_headers):
        response = await client.get(f"/api/skills/{STUDENT_UID}", headers=admin_headers)
        assert response.status_code == 200

    async def test_body_owner_checked(self, client, student_headers):
        response = await client.post(
            "/api/skills",
            json={"userId": MENTOR_UID, "skillName": "Python", "progress": 10},
            headers=student_headers,
        )
        assert response.status_code == 403

    async def test_admin_uid_not_special_for_members(self, client, mentor_headers):
        response = await client.get(f"/api/activities/{ADMIN_UID}", headers=mentor_headers)
        assert response.status_code == 403
