"""
FakeStack Backend — Tag and Health Endpoint Tests
===================================================
"""

import pytest


class TestTagRoutes:

    @pytest.mark.asyncio
    async def test_no_tags_is_empty_list(self, test_client):
        response = await test_client.get("/tag/getTagsWithQuestionNumber")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_counts_and_lookup(self, test_client):
        for tags in ([{"name": "react"}, {"name": "hooks"}], [{"name": "react"}]):
            await test_client.post(
                "/question/addQuestion",
                json={"title": "T", "text": "X", "tags": tags, "askedBy": "alice"},
            )

        counts = await test_client.get("/tag/getTagsWithQuestionNumber")
        assert sorted((t["name"], t["qcnt"]) for t in counts.json()) == [("hooks", 1), ("react", 2)]

        tag = await test_client.get("/tag/getTagByName/react")
        assert tag.status_code == 200
        assert tag.json()["name"] == "react"

        missing = await test_client.get("/tag/getTagByName/cobol")
        assert missing.status_code == 500


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] in ("healthy", "unhealthy")
        assert "version" in body
        assert response.headers["X-Request-ID"]
