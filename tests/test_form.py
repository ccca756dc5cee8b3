"""
Incident form tests - defaults, validation and timestamp conversion.
"""

import pytest
from datetime import datetime, timezone

from src.core.schema import Incident, IncidentType, Severity, Status
from tui.form import IncidentFormData, format_for_api, format_for_input, type_label


def test_defaults():
    form = IncidentFormData()
    assert form.severity == "medium"
    assert form.type == "malware"
    assert form.status == "open"


def test_type_label():
    assert type_label("brute_force") == "Brute Force"
    assert type_label("malware") == "Malware"


def test_timestamp_round_trip_through_form():
    assert format_for_input(datetime(2026, 2, 11, 8, 5, 30, tzinfo=timezone.utc)) == "2026-02-11T08:05"
    assert format_for_input(None) == ""
    assert format_for_api("2026-02-11T08:05") == "2026-02-11 08:05:00"
    assert format_for_api("") == ""


def test_from_incident():
    incident = Incident(
        id=3,
        timestamp=datetime(2026, 2, 11, 14, 30, tzinfo=timezone.utc),
        source_ip="172.16.0.25",
        severity=Severity.CRITICAL,
        type=IncidentType.PHISHING,
        status=Status.INVESTIGATING,
    )
    form = IncidentFormData.from_incident(incident)

    assert form.timestamp == "2026-02-11T14:30"
    assert form.severity == "critical"
    assert form.type == "phishing"
    assert form.status == "investigating"
    assert form.description == ""


class TestValidation:
    """Test field validation messages."""

    def test_valid_form(self):
        form = IncidentFormData(timestamp="2026-02-11T08:00", source_ip="192.168.1.1")
        assert form.validate() == {}

    def test_required_fields(self):
        errors = IncidentFormData().validate()
        assert errors["timestamp"] == "Timestamp is required"
        assert errors["source_ip"] == "Source IP is required"

    @pytest.mark.parametrize("ip", ["256.1.1.1", "10.0.0", "abc.def.ghi.jkl", "1.2.3.4.5"])
    def test_invalid_ip(self, ip):
        errors = IncidentFormData(timestamp="2026-02-11T08:00", source_ip=ip).validate()
        assert errors == {"source_ip": "Invalid IP address format (e.g., 192.168.1.1)"}

    def test_unparseable_timestamp(self):
        errors = IncidentFormData(timestamp="last tuesday", source_ip="10.0.0.1").validate()
        assert "timestamp" in errors


def test_to_payload():
    form = IncidentFormData(timestamp="2026-02-11T08:00", source_ip=" 10.0.0.1 ", severity="high")
    payload = form.to_payload()

    assert payload == {
        "timestamp": "2026-02-11 08:00:00",
        "source_ip": "10.0.0.1",
        "severity": "high",
        "type": "malware",
        "status": "open",
        "description": "",
    }
