from skillsage.storage.seed import SAMPLE_COURSES
from tests.conftest import STUDENT_UID


class TestCatalog:
    async def test_list_is_public(self, client):
        response = await client.get("/api/courses")
        assert response.status_code == 200
        assert len(response.json()) == len(SAMPLE_COURSES)
        assert {"title", "imageUrl", "isRecommended", "rating"} <= set(response.json()[0])

    async def test_recommended_for_user(self, client):
        response = await client.get(f"/api/courses/recommended/{STUDENT_UID}")
        titles = {c["title"] for c in response.json()}
        assert titles == {
            "Deep Learning Fundamentals",
            "Advanced Python for Data Science",
            "Communication Skills for Engineers",
        }

    async def test_recommended_for_unknown_user(self, client):
        response = await client.get("/api/courses/recommended/nobody")
        assert response.status_code == 200
        assert all(c["isRecommended"] for c in response.json())


class TestSearch:
    async def test_found_free_course(self, client):
        response = await client.get("/api/courses/search/deep learning")
        assert response.status_code == 200
        data = response.json()
        assert data["course"]["title"] == "Deep Learning Fundamentals"
        assert data["isPaid"] is False
        assert data["pricingInfo"] == "This course is free"
        assert data["courseraUrl"] == "https://www.coursera.org/search?query=Deep%20Learning%20Fundamentals"

    async def test_found_paid_course(self, client):
        response = await client.get("/api/courses/search/Cloud Architecture")
        data = response.json()
        assert data["isPaid"] is True
        assert data["pricingInfo"] == "This course costs $79.00"

    async def test_not_found_links_to_coursera(self, client):
        response = await client.get("/api/courses/search/quantum knitting")
        assert response.status_code == 404
        data = response.json()
        assert data["message"] == "Course not found in our database"
        assert data["courseraUrl"] == "https://www.coursera.org/search?query=quantum%20knitting"
        assert data["isPaid"] is True

    async def test_search_multiple(self, client):
        response = await client.get("/api/courses/search-multiple/python")
        data = response.json()
        assert data["count"] == 1
        assert data["searchTerm"] == "python"
        assert data["courses"][0]["title"] == "Advanced Python for Data Science"
        assert data["courses"][0]["courseraUrl"].startswith("https://www.coursera.org/search?query=")

    async def test_search_multiple_no_hits(self, client):
        response = await client.get("/api/courses/search-multiple/astrology")
        assert response.json() == {"courses": [], "count": 0, "searchTerm": "astrology"}


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["storage"] == "memory"
        assert data["identityConfigured"] is True
        assert data["aiConfigured"] is True

    async def test_metrics_exposed(self, client):
        response = await client.get("/metrics/")
        assert response.status_code == 200
        assert "python_info" in response.text
