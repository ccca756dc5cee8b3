"""
Shared fixtures - an in-memory incident store for list view and dashboard tests.
"""

import pytest
from datetime import datetime, timedelta, timezone

from src.core.schema import Incident, IncidentType, Severity, Status, parse_timestamp
from tui.store_client import StoreError

SEVERITY_CYCLE = ["low", "high", "medium", "critical"]


class FakeStore:
    """In-memory record store with the same surface as IncidentStoreClient."""

    def __init__(self, count=0):
        self.rows = {}
        self.next_id = 1
        self.fail = False
        self.list_calls = 0
        start = datetime(2026, 2, 1, tzinfo=timezone.utc)
        for i in range(count):
            self.create({
                "timestamp": start + timedelta(hours=i),
                "source_ip": "10.0.0.1",
                "severity": SEVERITY_CYCLE[i % 4],
                "type": "malware",
            })

    def list_all(self):
        self.list_calls += 1
        if self.fail:
            raise StoreError("Could not reach incident service")
        return [self.rows[key] for key in sorted(self.rows)]

    def create(self, data):
        incident = Incident(
            id=self.next_id,
            timestamp=parse_timestamp(data["timestamp"]),
            source_ip=data["source_ip"],
            severity=Severity(data["severity"]),
            type=IncidentType(data["type"]),
            status=Status(data.get("status", "open")),
            description=data.get("description"),
        )
        self.rows[incident.id] = incident
        self.next_id += 1
        return incident

    def update(self, incident_id, data):
        if incident_id not in self.rows:
            raise StoreError("Incident not found", status_code=404)
        self.rows[incident_id].severity = Severity(data["severity"])
        return self.rows[incident_id]

    def delete(self, incident_id):
        if incident_id not in self.rows:
            raise StoreError("Incident not found", status_code=404)
        del self.rows[incident_id]
        return {"message": "Incident deleted successfully"}


@pytest.fixture
def make_store():
    """Factory for FakeStore instances pre-filled with `count` incidents."""
    return FakeStore
