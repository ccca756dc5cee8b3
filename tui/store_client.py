"""
HTTP client for the incident REST service, used by the dashboard as its record store.
"""

from typing import Any, Dict, List, Optional

import requests

from src.core.config import get_api_base_url, REQUEST_TIMEOUT_SEC
from src.core.schema import Incident
from util.logging import logger


class StoreError(Exception):
    """A request to the incident store failed (network error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class IncidentStoreClient:
    """Thin wrapper over the /incidents endpoints."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = REQUEST_TIMEOUT_SEC,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.log_store_request(method, url, status="failed")
            raise StoreError(f"Could not reach incident service: {e}") from e

        if not response.ok:
            logger.log_store_request(method, url, response.status_code, status="failed")
            raise StoreError(self._error_message(response, method), status_code=response.status_code)

        logger.log_store_request(method, url, response.status_code)
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response, method: str) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if detail:
            return str(detail)
        return f"{method.upper()} failed with status {response.status_code}"

    def list_all(self) -> List[Incident]:
        """Fetch every incident, ordered by id ascending."""
        rows = self._request("GET", "/incidents")
        incidents = [Incident.from_dict(row) for row in rows]
        return sorted(incidents, key=lambda incident: incident.id)

    def get(self, incident_id: int) -> Incident:
        return Incident.from_dict(self._request("GET", f"/incidents/{incident_id}"))

    def create(self, data: Dict[str, Any]) -> Incident:
        return Incident.from_dict(self._request("POST", "/incidents", data))

    def update(self, incident_id: int, data: Dict[str, Any]) -> Incident:
        return Incident.from_dict(self._request("PUT", f"/incidents/{incident_id}", data))

    def delete(self, incident_id: int) -> Dict[str, Any]:
        return self._request("DELETE", f"/incidents/{incident_id}")
