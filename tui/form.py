"""
Incident create/edit form - field defaults, validation and timestamp formatting.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, Optional

from src.core.schema import (
    Incident,
    IncidentType,
    Severity,
    Status,
    format_timestamp,
    is_valid_ipv4,
    parse_timestamp,
)

SEVERITY_OPTIONS = [s.value for s in Severity]
STATUS_OPTIONS = [s.value for s in Status]
TYPE_OPTIONS = [t.value for t in IncidentType]

INPUT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M"


def type_label(value: str) -> str:
    """'brute_force' -> 'Brute Force'."""
    return " ".join(word.capitalize() for word in value.split("_"))


def format_for_input(value: Optional[datetime]) -> str:
    """UTC timestamp as the form shows it: YYYY-MM-DDTHH:MM."""
    if value is None:
        return ""
    return parse_timestamp(value).strftime(INPUT_TIMESTAMP_FORMAT)


def format_for_api(value: str) -> str:
    """Form timestamp as the API stores it: YYYY-MM-DD HH:MM:SS (UTC)."""
    if not value:
        return ""
    return format_timestamp(value)


@dataclass
class IncidentFormData:
    timestamp: str = ""
    source_ip: str = ""
    severity: str = Severity.MEDIUM.value
    type: str = IncidentType.MALWARE.value
    status: str = Status.OPEN.value
    description: str = ""

    @classmethod
    def from_incident(cls, incident: Incident) -> "IncidentFormData":
        return cls(
            timestamp=format_for_input(incident.timestamp),
            source_ip=incident.source_ip or "",
            severity=incident.severity.value,
            type=incident.type.value,
            status=incident.status.value,
            description=incident.description or "",
        )

    def validate(self) -> Dict[str, str]:
        """Return field -> message for every invalid field; empty when the form is valid."""
        errors = {}

        if not self.timestamp.strip():
            errors["timestamp"] = "Timestamp is required"
        else:
            try:
                parse_timestamp(self.timestamp)
            except ValueError:
                errors["timestamp"] = "Timestamp must look like 2026-02-11T08:00"

        if not self.source_ip.strip():
            errors["source_ip"] = "Source IP is required"
        elif not is_valid_ipv4(self.source_ip.strip()):
            errors["source_ip"] = "Invalid IP address format (e.g., 192.168.1.1)"

        if not self.severity:
            errors["severity"] = "Severity is required"

        if not self.type:
            errors["type"] = "Type is required"

        return errors

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["timestamp"] = format_for_api(self.timestamp)
        payload["source_ip"] = self.source_ip.strip()
        return payload
