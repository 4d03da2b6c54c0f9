"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from lead_enricher.api.main import create_app
from lead_enricher.config import Settings
from lead_enricher.services import open_services


def make_settings(**kwargs) -> Settings:
    """Offline settings backed by an in-memory database."""
    defaults = {
        "database_url_override": "sqlite://",
        "cache_backend": "memory",
        "batch_delay_seconds": 0,
        "discovery_provider": "none",
    }
    defaults.update(kwargs)
    return Settings(**defaults)


@pytest.fixture
def client():
    app = create_app(lambda: open_services(make_settings()))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_only_client():
    app = create_app(lambda: open_services(make_settings(memory_only=True)))
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "1.0.0"
        assert "timestamp" in body


class TestEnrichEndpoints:
    """Tests for the enrichment endpoints."""

    def test_enrich_single(self, client):
        response = client.post("/api/enrich", json={
            "company_name": "Tacos El Buen Sabor",
            "phone": "+52 55 1234 5678",
            "location": "Ciudad de México",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["industry"] == "restaurante"
        assert body["lead_score"] == 60
        assert len(body["emails"]) == 5

    def test_enrich_requires_name(self, client):
        response = client.post("/api/enrich", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "company_name is required"

    def test_enrich_batch(self, client):
        response = client.post("/api/enrich-batch", json={"companies": [
            {"company_name": "Tacos El Buen Sabor"},
            {"phone": "5512345678"},
            {"nombre": "Panadería La Esperanza", "ciudad": "Puebla"},
        ]})
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["processed"] == 3
        assert body["successful"] == 2
        assert body["failed"] == 1
        assert body["results"][1]["error"] == "company_name is required"
        assert body["results"][2]["industry"] == "panadería"

    def test_enrich_batch_rejects_non_list(self, client):
        response = client.post("/api/enrich-batch", json={"companies": "nope"})
        assert response.status_code == 422


class TestLeadEndpoints:
    """Tests for stored lead queries."""

    def test_stats_after_enrichment(self, client):
        client.post("/api/enrich", json={"company_name": "Tacos El Buen Sabor", "phone": "1"})
        client.post("/api/enrich", json={"company_name": "Clínica Santa Fe", "phone": "2"})

        response = client.get("/api/leads/stats")

        assert response.status_code == 200
        body = response.json()
        assert body["total_leads"] == 2
        assert body["leads_with_emails"] == 2
        assert body["industries_covered"] == 2

    def test_lookup(self, client):
        client.post("/api/enrich", json={"company_name": "Tacos El Buen Sabor", "phone": "1"})

        found = client.get("/api/leads/lookup", params={"company_name": "Tacos El Buen Sabor", "phone": "1"})
        missing = client.get("/api/leads/lookup", params={"company_name": "Nadie"})

        assert found.status_code == 200
        assert found.json()["lead_score"] == 60
        assert missing.status_code == 404

    def test_memory_only_has_no_store(self, memory_only_client):
        response = memory_only_client.post("/api/enrich", json={"company_name": "Tacos El Buen Sabor"})
        assert response.status_code == 200
        assert memory_only_client.get("/api/leads/stats").status_code == 503
