"""
Incident record types shared by the REST service and the dashboard.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Dotted IPv4, each octet 0-255
IPV4_PATTERN = re.compile(
    r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)


def is_valid_ipv4(value: str) -> bool:
    return bool(IPV4_PATTERN.fullmatch(value or ""))


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANKS[self]


SEVERITY_RANKS = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class Status(str, Enum):
    OPEN = "open"
    INVESTIGATING = "investigating"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IncidentType(str, Enum):
    MALWARE = "malware"
    BRUTE_FORCE = "brute_force"
    PHISHING = "phishing"
    UNAUTHORIZED_ACCESS = "unauthorized_access"
    DATA_EXFILTRATION = "data_exfiltration"


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 or 'YYYY-MM-DD HH:MM:SS' value into an aware UTC datetime.

    Naive values are taken to be UTC. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        raw = str(value or "").strip()
        if not raw:
            raise ValueError("timestamp is required")
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Storage/wire format: UTC 'YYYY-MM-DD HH:MM:SS'."""
    return parse_timestamp(value).strftime(TIMESTAMP_FORMAT)


@dataclass
class Incident:
    id: int
    timestamp: datetime
    source_ip: str
    severity: Severity
    type: IncidentType
    status: Status
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Incident":
        return cls(
            id=int(data["id"]),
            timestamp=parse_timestamp(data["timestamp"]),
            source_ip=data["source_ip"],
            severity=Severity(data["severity"]),
            type=IncidentType(data["type"]),
            status=Status(data.get("status") or Status.OPEN.value),
            description=data.get("description"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": format_timestamp(self.timestamp),
            "source_ip": self.source_ip,
            "severity": self.severity.value,
            "type": self.type.value,
            "status": self.status.value,
            "description": self.description,
        }
