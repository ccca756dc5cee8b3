"""
Incident data access - CRUD statements over the single incidents table.
"""

import sqlite3
from typing import Optional, List, Dict, Any

from .db import get_db
from .schema import Incident
from util.logging import logger

INCIDENT_COLUMNS = "id, timestamp, source_ip, severity, type, status, description"


class IncidentNotFoundError(LookupError):
    """Raised when an incident id does not exist."""

    def __init__(self, incident_id: int):
        super().__init__(f"Incident {incident_id} not found")
        self.incident_id = incident_id


def _row_to_incident(row: sqlite3.Row) -> Incident:
    return Incident.from_dict(dict(row))


def list_incidents() -> List[Incident]:
    """Return every incident, newest first."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {INCIDENT_COLUMNS} FROM incidents ORDER BY timestamp DESC, id DESC")
        rows = cursor.fetchall()

    logger.log_incident_operation("list", payload={"count": len(rows)})
    return [_row_to_incident(row) for row in rows]


def get_incident(incident_id: int) -> Optional[Incident]:
    """Get a single incident by id, or None if it does not exist."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {INCIDENT_COLUMNS} FROM incidents WHERE id = ?", (incident_id,))
        row = cursor.fetchone()

    if row is None:
        return None
    return _row_to_incident(row)


def create_incident(data: Dict[str, Any]) -> Incident:
    """Insert a new incident and return it as stored."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "INSERT INTO incidents (timestamp, source_ip, severity, type, status, description) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                data["timestamp"],
                data["source_ip"],
                data["severity"],
                data["type"],
                data.get("status") or "open",
                data.get("description") or None,
            ),
        )
        conn.commit()
        new_id = cursor.lastrowid

    logger.log_incident_operation("create", incident_id=new_id, payload=data)
    return get_incident(new_id)


def update_incident(incident_id: int, data: Dict[str, Any]) -> Incident:
    """Replace all editable fields of an incident."""
    if get_incident(incident_id) is None:
        logger.log_incident_operation("update", incident_id=incident_id, status="not_found")
        raise IncidentNotFoundError(incident_id)

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute(
            "UPDATE incidents "
            "SET timestamp = ?, source_ip = ?, severity = ?, type = ?, status = ?, description = ?, "
            "updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ?",
            (
                data["timestamp"],
                data["source_ip"],
                data["severity"],
                data["type"],
                data["status"],
                data.get("description") or None,
                incident_id,
            ),
        )
        conn.commit()

    logger.log_incident_operation("update", incident_id=incident_id, payload=data)
    return get_incident(incident_id)


def delete_incident(incident_id: int) -> None:
    """Delete an incident by id."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM incidents WHERE id = ?", (incident_id,))
        conn.commit()
        deleted = cursor.rowcount

    if deleted == 0:
        logger.log_incident_operation("delete", incident_id=incident_id, status="not_found")
        raise IncidentNotFoundError(incident_id)

    logger.log_incident_operation("delete", incident_id=incident_id)


def get_incident_count() -> int:
    """Get total count of incidents."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT COUNT(*) FROM incidents")
        return cursor.fetchone()[0]
