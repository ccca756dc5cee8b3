"""
Dashboard store client tests - request mapping and error translation.
"""

import pytest
import requests
from unittest.mock import MagicMock

from src.core.schema import Severity
from tui.store_client import IncidentStoreClient, StoreError


def make_response(status_code=200, body=None, json_error=False):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


def row(incident_id, timestamp="2026-02-11 08:00:00", severity="low"):
    return {
        "id": incident_id,
        "timestamp": timestamp,
        "source_ip": "10.0.0.1",
        "severity": severity,
        "type": "malware",
        "status": "open",
        "description": None,
    }


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return IncidentStoreClient(base_url="http://testserver/api/", timeout=2.5, session=session)


class TestRequests:
    """Test how operations map onto HTTP calls."""

    def test_list_all_sorts_by_id(self, client, session):
        session.request.return_value = make_response(body=[
            row(3, "2026-02-11 10:00:00"), row(1, "2026-02-11 09:00:00"), row(2, "2026-02-11 08:00:00"),
        ])

        incidents = client.list_all()

        assert [i.id for i in incidents] == [1, 2, 3]
        session.request.assert_called_once_with(
            "GET", "http://testserver/api/incidents", json=None, timeout=2.5
        )

    def test_create_posts_payload(self, client, session):
        payload = {"timestamp": "2026-02-11 08:00:00", "source_ip": "10.0.0.1",
                   "severity": "high", "type": "malware"}
        session.request.return_value = make_response(201, row(7, severity="high"))

        created = client.create(payload)

        assert created.id == 7
        assert created.severity == Severity.HIGH
        session.request.assert_called_once_with(
            "POST", "http://testserver/api/incidents", json=payload, timeout=2.5
        )

    def test_update_puts_to_incident_url(self, client, session):
        session.request.return_value = make_response(body=row(4))
        client.update(4, {"status": "closed"})
        assert session.request.call_args[0][:2] == ("PUT", "http://testserver/api/incidents/4")

    def test_delete_returns_message(self, client, session):
        session.request.return_value = make_response(body={"message": "Incident deleted successfully"})
        assert client.delete(4) == {"message": "Incident deleted successfully"}
        assert session.request.call_args[0][:2] == ("DELETE", "http://testserver/api/incidents/4")


class TestErrors:
    """Test translation of failures into StoreError."""

    def test_network_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(StoreError) as exc_info:
            client.list_all()

        assert exc_info.value.status_code is None
        assert "Could not reach incident service" in str(exc_info.value)

    def test_error_detail_is_used(self, client, session):
        session.request.return_value = make_response(404, {"detail": "Incident not found"})

        with pytest.raises(StoreError) as exc_info:
            client.get(99)

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "Incident not found"

    def test_non_json_error_body(self, client, session):
        session.request.return_value = make_response(502, json_error=True)

        with pytest.raises(StoreError) as exc_info:
            client.delete(1)

        assert exc_info.value.status_code == 502
        assert str(exc_info.value) == "DELETE failed with status 502"

    def test_non_dict_error_body(self, client, session):
        session.request.return_value = make_response(500, ["boom"])

        with pytest.raises(StoreError) as exc_info:
            client.create({})

        assert str(exc_info.value) == "POST failed with status 500"
