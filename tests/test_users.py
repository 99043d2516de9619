"""User registration, first-login bootstrap and profile endpoints."""

from skillsage.schemas.user import UserCreate
from tests.conftest import NEWCOMER_UID, STUDENT_UID


class TestRegistration:
    async def test_defaults_applied(self, client, newcomer_headers):
        response = await client.post("/api/users", json={"email": "a@b.com", "name": "A"}, headers=newcomer_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["id"] == NEWCOMER_UID
        assert data["role"] == "student"
        assert data["credits"] == 0
        assert data["internshipHours"] == 0
        assert data["photoURL"] is None

    async def test_existing_record_returned_unchanged(self, client, student_headers):
        response = await client.post(
            "/api/users", json={"email": "ada@skillsage.io", "name": "Someone Else"}, headers=student_headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Ada Lovelace"

    async def test_member_cannot_register_as_admin(self, client, newcomer_headers):
        response = await client.post(
            "/api/users",
            json={"email": "alan@skillsage.io", "name": "Alan Turing", "role": "admin"},
            headers=newcomer_headers,
        )
        assert response.status_code == 403
        assert response.json()["required"] == ["admin"]

    async def test_member_cannot_register_someone_else(self, client, newcomer_headers):
        response = await client.post(
            "/api/users",
            json={"email": "alan@skillsage.io", "name": "Alan Turing", "firebaseUid": "someone-else"},
            headers=newcomer_headers,
        )
        assert response.status_code == 403

    async def test_duplicate_email_rejected(self, client, newcomer_headers):
        response = await client.post(
            "/api/users", json={"email": "ada@skillsage.io", "name": "Alan Turing"}, headers=newcomer_headers
        )
        assert response.status_code == 400
        assert response.json() == {"message": "A user with this email already exists"}

    async def test_admin_chooses_id(self, client, admin_headers):
        response = await client.post(
            "/api/users",
            json={"email": "edsger@skillsage.io", "name": "Edsger Dijkstra", "role": "mentor", "firebaseUid": "u1"},
            headers=admin_headers,
        )
        assert response.status_code == 201
        assert response.json()["id"] == "u1"
        assert response.json()["role"] == "mentor"

    async def test_admin_must_name_subject(self, client, storage, admin_headers):
        response = await client.post(
            "/api/users", json={"email": "barbara@skillsage.io", "name": "Barbara Liskov"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json() == {"message": "firebaseUid is required when creating a user record"}
        assert await storage.get_user_by_email("barbara@skillsage.io") is None

    async def test_pre_provisioned_user_can_sign_in(self, client, admin_headers, newcomer_headers):
        response = await client.post(
            "/api/users",
            json={"email": "alan@skillsage.io", "name": "Alan", "role": "mentor", "firebaseUid": NEWCOMER_UID},
            headers=admin_headers,
        )
        assert response.status_code == 201

        response = await client.post("/api/auth/session", headers=newcomer_headers)
        assert response.status_code == 200
        assert response.json()["created"] is False
        assert response.json()["user"]["role"] == "mentor"

        response = await client.post("/api/chat", json={"message": "hello"}, headers=newcomer_headers)
        assert response.status_code == 200

    async def test_invalid_email(self, client, newcomer_headers):
        response = await client.post("/api/users", json={"email": "not-an-email", "name": "A"}, headers=newcomer_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"


class TestSessionBootstrap:
    async def test_first_login_creates_record_once(self, client, storage, newcomer_headers):
        first = await client.post("/api/auth/session", headers=newcomer_headers)
        second = await client.post("/api/auth/session", headers=newcomer_headers)

        assert first.status_code == 200
        assert first.json()["created"] is True
        assert second.json()["created"] is False
        assert first.json()["user"]["role"] == "student"
        assert second.json()["user"]["lastLoginAt"] is not None
        assert len([u for u in await storage.list_users() if u.id == NEWCOMER_UID]) == 1

    async def test_existing_user_only_refreshes_login(self, client, storage, student_headers):
        response = await client.post("/api/auth/session", headers=student_headers)
        assert response.json()["created"] is False
        user = await storage.get_user(STUDENT_UID)
        assert user.last_login_at is not None
        assert user.name == "Ada Lovelace"

    async def test_email_taken_by_another_sign_in(self, client, storage, newcomer_headers):
        await storage.create_user(UserCreate(email="alan@skillsage.io", name="Alan"), user_id="legacy-id")
        response = await client.post("/api/auth/session", headers=newcomer_headers)
        assert response.status_code == 409
        assert response.json() == {"message": "An account with this email is already registered to another sign-in"}


class TestProfile:
    async def test_missing_user(self, client, admin_headers):
        response = await client.get("/api/user/nonexistent-id", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}

    async def test_update_own_profile(self, client, storage, student_headers):
        response = await client.patch(
            f"/api/user/{STUDENT_UID}",
            json={"name": "Ada King", "skills": ["Python", "Mathematics"], "credits": 12},
            headers=student_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Ada King"
        assert data["skills"] == ["Python", "Mathematics"]
        assert data["credits"] == 12

        activities = await storage.get_activities(STUDENT_UID)
        assert activities[0].type.value == "profile_updated"

    async def test_member_cannot_change_own_role(self, client, storage, student_headers):
        response = await client.patch(f"/api/user/{STUDENT_UID}", json={"role": "admin"}, headers=student_headers)
        assert response.status_code == 200
        assert (await storage.get_user(STUDENT_UID)).role.value == "student"

    async def test_null_does_not_clear_required_fields(self, client, student_headers):
        response = await client.patch(f"/api/user/{STUDENT_UID}", json={"name": None}, headers=student_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Ada Lovelace"

    async def test_negative_counter_rejected(self, client, student_headers):
        response = await client.patch(f"/api/user/{STUDENT_UID}", json={"credits": -1}, headers=student_headers)
        assert response.status_code == 400


class TestSkillProgressScenario:
    async def test_repeated_updates_leave_one_entry(self, client, admin_headers):
        await client.post(
            "/api/users",
            json={"email": "edsger@skillsage.io", "name": "Edsger Dijkstra", "firebaseUid": "u1"},
            headers=admin_headers,
        )
        for progress in (40, 60):
            response = await client.post(
                "/api/skills",
                json={"userId": "u1", "skillName": "Python", "progress": progress},
                headers=admin_headers,
            )
            assert response.status_code == 200

        response = await client.get("/api/skills/u1", headers=admin_headers)
        entries = [e for e in response.json() if e["skillName"] == "Python"]
        assert len(entries) == 1
        assert entries[0]["progress"] == 60

    async def test_progress_out_of_range(self, client, student_headers):
        response = await client.post(
            "/api/skills",
            json={"userId": STUDENT_UID, "skillName": "Python", "progress": 140},
            headers=student_headers,
        )
        assert response.status_code == 400
