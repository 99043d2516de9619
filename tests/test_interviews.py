import json

from tests.conftest import MENTOR_UID, NEWCOMER_UID, STUDENT_UID


class TestQuestion:
    async def test_generated_question(self, client, ai_client, mentor_headers):
        ai_client.reply_with("Walk me through how you would design a URL shortener.")
        response = await client.post("/api/interview/question", json={"type": "technical"}, headers=mentor_headers)
        assert response.status_code == 200
        assert response.json() == {
            "question": "Walk me through how you would design a URL shortener.",
            "type": "technical",
        }

    async def test_defaults_to_behavioral(self, client, student_headers):
        response = await client.post("/api/interview/question", json={}, headers=student_headers)
        assert response.json()["type"] == "behavioral"
        assert response.json()["question"]

    async def test_unknown_type_rejected(self, client, student_headers):
        response = await client.post("/api/interview/question", json={"type": "trivia"}, headers=student_headers)
        assert response.status_code == 400

    async def test_requires_auth(self, client):
        response = await client.post("/api/interview/question", json={"type": "technical"})
        assert response.status_code == 401


class TestAnalyze:
    async def test_session_and_activity_recorded(self, client, ai_client, storage, student_headers):
        ai_client.reply_with(
            json.dumps({"score": 84, "feedback": "Good use of STAR", "improvements": ["Quantify"], "strengths": ["Clear"]})
        )
        response = await client.post(
            "/api/interview/analyze",
            json={
                "userId": STUDENT_UID,
                "type": "behavioral",
                "question": "Tell me about a conflict.",
                "response": "I listened first, then we agreed on a plan.",
            },
            headers=student_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 84
        assert data["session"]["userResponse"] == "I listened first, then we agreed on a plan."

        sessions = await client.get(f"/api/interviews/{STUDENT_UID}", headers=student_headers)
        assert [s["score"] for s in sessions.json()] == [84]

        activities = await storage.get_activities(STUDENT_UID)
        assert activities[0].description == "Completed behavioral interview with score 84"

    async def test_default_feedback_on_bad_reply(self, client, ai_client, student_headers):
        ai_client.reply_with("I think it was great!")
        response = await client.post(
            "/api/interview/analyze",
            json={"userId": STUDENT_UID, "type": "case_study", "question": "Size the market.", "response": "Big."},
            headers=student_headers,
        )
        assert response.status_code == 200
        assert response.json()["score"] == 75

    async def test_cannot_analyze_for_someone_else(self, client, student_headers):
        response = await client.post(
            "/api/interview/analyze",
            json={"userId": MENTOR_UID, "type": "technical", "question": "Q?", "response": "A."},
            headers=student_headers,
        )
        assert response.status_code == 403

    async def test_unknown_user_rejected_before_ai_call(self, client, ai_client, storage, newcomer_headers):
        response = await client.post(
            "/api/interview/analyze",
            json={"userId": NEWCOMER_UID, "type": "technical", "question": "Q?", "response": "A."},
            headers=newcomer_headers,
        )
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}
        assert ai_client.completions.calls == []
        assert await storage.get_interview_sessions(NEWCOMER_UID) == []
