"""
Incident REST API tests - CRUD endpoints, validation and error responses.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.core.db import init_db, seed_db

TEST_INCIDENTS = [
    {
        "timestamp": "2026-02-11 08:00:00",
        "source_ip": "192.168.1.100",
        "severity": "critical",
        "type": "malware",
        "status": "open",
        "description": "Test critical malware incident",
    },
    {
        "timestamp": "2026-02-11 09:00:00",
        "source_ip": "10.0.0.50",
        "severity": "high",
        "type": "brute_force",
        "status": "investigating",
        "description": "Test high severity brute force attack",
    },
    {
        "timestamp": "2026-02-11 10:00:00",
        "source_ip": "172.16.0.25",
        "severity": "medium",
        "type": "phishing",
        "status": "resolved",
        "description": "Test medium phishing attempt",
    },
    {
        "timestamp": "2026-02-11 11:00:00",
        "source_ip": "192.168.2.200",
        "severity": "low",
        "type": "unauthorized_access",
        "status": "closed",
        "description": "Test low severity access attempt",
    },
]

VALID_NEW_INCIDENT = {
    "timestamp": "2026-02-11 12:00:00",
    "source_ip": "10.10.10.10",
    "severity": "high",
    "type": "data_exfiltration",
    "status": "open",
    "description": "Newly created test incident",
}

UPDATE_DATA = {
    "timestamp": "2026-02-11 13:00:00",
    "source_ip": "192.168.1.100",
    "severity": "critical",
    "type": "malware",
    "status": "resolved",
    "description": "Updated: Incident has been resolved",
}


@pytest.fixture
def test_db(tmp_path, monkeypatch):
    """Fresh database with the four fixture incidents."""
    db_path = tmp_path / "test_incidents.db"
    monkeypatch.setenv("DB_PATH", str(db_path))
    init_db()
    seed_db(TEST_INCIDENTS)
    yield db_path


@pytest.fixture
def client(test_db):
    return TestClient(app)


def first_id(client):
    return client.get("/api/incidents").json()[0]["id"]


class TestHealth:
    def test_health_reports_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["db_health"] is True
        assert body["incident_count"] == 4
        assert "timestamp" in body


class TestListIncidents:
    """GET /api/incidents"""

    def test_returns_all_incidents(self, client):
        response = client.get("/api/incidents")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()) == 4

    def test_incidents_have_all_fields(self, client):
        incident = client.get("/api/incidents").json()[0]
        for field in ("id", "timestamp", "source_ip", "severity", "type", "status", "description"):
            assert field in incident

    def test_ordered_by_timestamp_descending(self, client):
        timestamps = [i["timestamp"] for i in client.get("/api/incidents").json()]
        assert timestamps == sorted(timestamps, reverse=True)


class TestGetIncident:
    """GET /api/incidents/{id}"""

    def test_returns_single_incident(self, client):
        existing_id = first_id(client)
        response = client.get(f"/api/incidents/{existing_id}")
        assert response.status_code == 200
        assert response.json()["id"] == existing_id

    def test_404_for_missing_incident(self, client):
        response = client.get("/api/incidents/99999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Incident not found"


class TestCreateIncident:
    """POST /api/incidents"""

    def test_creates_incident(self, client):
        response = client.post("/api/incidents", json=VALID_NEW_INCIDENT)
        assert response.status_code == 201
        body = response.json()
        assert "id" in body
        for field in ("source_ip", "severity", "type", "status", "timestamp"):
            assert body[field] == VALID_NEW_INCIDENT[field]
        assert len(client.get("/api/incidents").json()) == 5

    def test_missing_required_fields(self, client):
        response = client.post("/api/incidents", json={"description": "Missing required fields"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"

    @pytest.mark.parametrize("field", ["timestamp", "source_ip", "severity", "type"])
    def test_each_required_field(self, client, field):
        payload = {k: v for k, v in VALID_NEW_INCIDENT.items() if k != field}
        response = client.post("/api/incidents", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"

    def test_status_defaults_to_open(self, client):
        payload = {k: v for k, v in VALID_NEW_INCIDENT.items() if k != "status"}
        response = client.post("/api/incidents", json=payload)
        assert response.status_code == 201
        assert response.json()["status"] == "open"

    def test_blank_description_is_null(self, client):
        response = client.post("/api/incidents", json={**VALID_NEW_INCIDENT, "description": "  "})
        assert response.status_code == 201
        assert response.json()["description"] is None

    def test_invalid_ip_rejected(self, client):
        response = client.post("/api/incidents", json={**VALID_NEW_INCIDENT, "source_ip": "999.1.1.1"})
        assert response.status_code == 400
        assert "source_ip" in response.json()["detail"]

    def test_invalid_severity_rejected(self, client):
        response = client.post("/api/incidents", json={**VALID_NEW_INCIDENT, "severity": "urgent"})
        assert response.status_code == 400
        assert "severity" in response.json()["detail"]

    def test_iso_timestamp_is_normalized_to_utc(self, client):
        response = client.post("/api/incidents", json={**VALID_NEW_INCIDENT, "timestamp": "2026-02-11T14:30:00+02:00"})
        assert response.status_code == 201
        assert response.json()["timestamp"] == "2026-02-11 12:30:00"

    def test_invalid_timestamp_rejected(self, client):
        response = client.post("/api/incidents", json={**VALID_NEW_INCIDENT, "timestamp": "yesterday"})
        assert response.status_code == 400
        assert "timestamp" in response.json()["detail"]


class TestUpdateIncident:
    """PUT /api/incidents/{id}"""

    def test_updates_incident(self, client):
        existing_id = first_id(client)
        response = client.put(f"/api/incidents/{existing_id}", json=UPDATE_DATA)
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == existing_id
        assert body["status"] == "resolved"
        assert body["description"] == UPDATE_DATA["description"]

        fetched = client.get(f"/api/incidents/{existing_id}").json()
        assert fetched["timestamp"] == UPDATE_DATA["timestamp"]

    def test_404_for_missing_incident(self, client):
        response = client.put("/api/incidents/99999", json=UPDATE_DATA)
        assert response.status_code == 404
        assert response.json()["detail"] == "Incident not found"

    def test_status_required_on_update(self, client):
        existing_id = first_id(client)
        payload = {k: v for k, v in UPDATE_DATA.items() if k != "status"}
        response = client.put(f"/api/incidents/{existing_id}", json=payload)
        assert response.status_code == 400


class TestDeleteIncident:
    """DELETE /api/incidents/{id}"""

    def test_deletes_incident(self, client):
        existing_id = first_id(client)
        response = client.delete(f"/api/incidents/{existing_id}")
        assert response.status_code == 200
        assert response.json()["message"] == "Incident deleted successfully"

        assert client.get(f"/api/incidents/{existing_id}").status_code == 404
        assert len(client.get("/api/incidents").json()) == 3

    def test_404_for_missing_incident(self, client):
        response = client.delete("/api/incidents/99999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Incident not found"


class TestOpenAPI:
    """Error responses are documented with the shared error model."""

    def test_error_model_in_schema(self, client):
        schema = client.get("/openapi.json").json()
        get_responses = schema["paths"]["/api/incidents/{incident_id}"]["get"]["responses"]
        post_responses = schema["paths"]["/api/incidents"]["post"]["responses"]

        assert get_responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert post_responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "detail" in schema["components"]["schemas"]["ErrorResponse"]["properties"]
