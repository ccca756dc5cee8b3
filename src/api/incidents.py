"""
Incident CRUD endpoints.
"""

from fastapi import APIRouter, HTTPException
from typing import List

from ..core.dao import (
    IncidentNotFoundError,
    list_incidents,
    get_incident,
    create_incident,
    update_incident,
    delete_incident,
)
from .schemas import (
    CREATE_REQUIRED_FIELDS,
    UPDATE_REQUIRED_FIELDS,
    DeleteResponse,
    ErrorResponse,
    IncidentResponse,
    IncidentWriteRequest,
)

router = APIRouter(responses={
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    404: {"model": ErrorResponse, "description": "Incident not found"},
})

NOT_FOUND = "Incident not found"


def _require(request: IncidentWriteRequest, required: tuple) -> None:
    if request.missing_fields(required):
        raise HTTPException(status_code=400, detail="Missing required fields")


@router.get("", response_model=List[IncidentResponse])
def list_incidents_endpoint():
    """Return every incident. Sorting and paging happen in the dashboard."""
    return [IncidentResponse.from_incident(i) for i in list_incidents()]


@router.get("/{incident_id}", response_model=IncidentResponse)
def get_incident_endpoint(incident_id: int):
    """Get a single incident by ID."""
    incident = get_incident(incident_id)
    if incident is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return IncidentResponse.from_incident(incident)


@router.post("", response_model=IncidentResponse, status_code=201)
def create_incident_endpoint(request: IncidentWriteRequest):
    """Create a new incident. Status defaults to 'open'."""
    _require(request, CREATE_REQUIRED_FIELDS)
    incident = create_incident(request.model_dump())
    return IncidentResponse.from_incident(incident)


@router.put("/{incident_id}", response_model=IncidentResponse)
def update_incident_endpoint(incident_id: int, request: IncidentWriteRequest):
    """Replace an existing incident."""
    if get_incident(incident_id) is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    _require(request, UPDATE_REQUIRED_FIELDS)

    try:
        incident = update_incident(incident_id, request.model_dump())
    except IncidentNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return IncidentResponse.from_incident(incident)


@router.delete("/{incident_id}", response_model=DeleteResponse)
def delete_incident_endpoint(incident_id: int):
    """Delete an incident."""
    try:
        delete_incident(incident_id)
    except IncidentNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return DeleteResponse(message="Incident deleted successfully")
