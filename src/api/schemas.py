"""
Request and response models for the incident REST API.
"""

from pydantic import BaseModel, field_validator, ConfigDict
from typing import Optional, List
from datetime import datetime

from ..core.schema import Incident, IncidentType, Severity, Status, format_timestamp, is_valid_ipv4

CREATE_REQUIRED_FIELDS = ("timestamp", "source_ip", "severity", "type")
UPDATE_REQUIRED_FIELDS = CREATE_REQUIRED_FIELDS + ("status",)


class IncidentWriteRequest(BaseModel):
    """Body of POST and PUT requests.

    Every field is optional at the model level so that a missing required
    field is reported as 'Missing required fields' by the route, while a
    present-but-invalid value fails validation here.
    """
    model_config = ConfigDict(use_enum_values=True)

    timestamp: Optional[str] = None
    source_ip: Optional[str] = None
    severity: Optional[Severity] = None
    type: Optional[IncidentType] = None
    status: Optional[Status] = None
    description: Optional[str] = None

    @field_validator('timestamp')
    @classmethod
    def timestamp_must_parse(cls, v):
        if v is None or not v.strip():
            return None
        try:
            return format_timestamp(v)
        except ValueError:
            raise ValueError('timestamp must be ISO-8601 or YYYY-MM-DD HH:MM:SS')

    @field_validator('source_ip')
    @classmethod
    def source_ip_must_be_ipv4(cls, v):
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not is_valid_ipv4(v):
            raise ValueError('Invalid IP address format (e.g., 192.168.1.1)')
        return v

    @field_validator('description')
    @classmethod
    def blank_description_is_null(cls, v):
        if v is None or not v.strip():
            return None
        return v

    def missing_fields(self, required: tuple) -> List[str]:
        return [name for name in required if getattr(self, name) is None]


class IncidentResponse(BaseModel):
    id: int
    timestamp: str
    source_ip: str
    severity: Severity
    type: IncidentType
    status: Status
    description: Optional[str] = None

    @classmethod
    def from_incident(cls, incident: Incident) -> "IncidentResponse":
        return cls(**incident.to_dict())


class DeleteResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    db_health: bool
    incident_count: int


class ErrorResponse(BaseModel):
    detail: str
