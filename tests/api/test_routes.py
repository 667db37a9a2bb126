"""
Tests for the HTTP surface.
"""

import pytest
from fastapi.testclient import TestClient

from storyguard.main import app

ACCOUNT = {
    "id": "acc_acme",
    "name": "Acme Corp",
    "normalized_name": "acme",
    "domain": "acme.com",
    "domain_aliases": ["acme.io"],
    "contacts": [{"name": "Jane Doe", "title": "CEO", "email": "jane@acme.com"}],
}

BODY = (
    "Jane Doe, CEO of Acme said the new workflow cut onboarding from six "
    "weeks to ten days across every regional team."
)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestScrubRoutes:
    """Test suite for /api/scrub."""

    def test_preview(self, client):
        """Test scrubbing a single fragment."""
        response = client.post(
            "/api/scrub/preview",
            json={"account": ACCOUNT, "text": "Acme Corp cut onboarding time in half."},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["scrubbed_text"] == "the client cut onboarding time in half."
        assert body["replacements_made"] == 1
        assert body["terms_replaced"] == ["Acme Corp"]

    def test_preview_custom_mappings(self, client):
        """Test custom mapping pairs sent as JSON arrays."""
        response = client.post(
            "/api/scrub/preview",
            json={
                "account": ACCOUNT,
                "text": "Acme shipped.",
                "custom_mappings": [["Acme", "a logistics company"]],
            },
        )
        assert response.json()["scrubbed_text"] == "a logistics company shipped."

    def test_terms(self, client):
        """Test the catalog inspection endpoint."""
        response = client.post("/api/scrub/terms", json={"account": ACCOUNT})

        assert response.status_code == 200
        body = response.json()
        assert [t["pattern"] for t in body["domain_terms"]] == ["acme.com", "acme.io"]
        assert [t["pattern"] for t in body["name_terms"]] == ["Acme Corp", "acme"]

    def test_missing_account_is_rejected(self, client):
        """Test request validation."""
        response = client.post("/api/scrub/preview", json={"text": "hello"})
        assert response.status_code == 422


class TestPublishRoutes:
    """Test suite for /api/publish."""

    def test_check_success(self, client):
        """Test a publishable page."""
        response = client.post(
            "/api/publish/check",
            json={
                "account": ACCOUNT,
                "content": {"title": "How Acme Corp halved onboarding", "body": BODY},
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "How the client halved onboarding"
        assert body["state_history"][-1] == "published"

    def test_check_leakage(self, client):
        """Test that leaked identifiers come back as a 422."""
        account = {"id": "acc_box", "name": "Box Inc"}
        response = client.post(
            "/api/publish/check",
            json={
                "account": account,
                "content": {
                    "title": "Storage story",
                    "body": "The team moved every shared box folder into one "
                    "workspace and cut search time by half overall.",
                },
            },
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "scrub_validation_failed"
        assert detail["leaked_terms"] == ["box"]

    def test_check_structural_issues(self, client):
        """Test that structural issues come back as a 422."""
        response = client.post(
            "/api/publish/check",
            json={"account": ACCOUNT, "content": {"title": "Hi", "body": BODY}},
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "publish_validation_failed"
        assert detail["issues"][0]["code"] == "title_too_short"


def test_health(client):
    """Test the health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
