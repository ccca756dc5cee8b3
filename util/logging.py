"""
Structured logging for the incident log - store operations, HTTP client calls and list view events.
"""

import logging
from typing import Any, Dict

from src.core.config import debug_enabled


class StructuredLogger:
    """Structured logger for incident store, client and list view operations."""

    def __init__(self, name: str = "incident_log", level: int = None):
        self.logger = logging.getLogger(name)
        if level is None:
            level = logging.DEBUG if debug_enabled() else logging.INFO
        self.logger.setLevel(level)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_incident_operation(self, operation: str, incident_id: Any = None,
                               payload: Dict[str, Any] = None, status: str = "success"):
        """Log an incident store operation."""
        details = {}
        if incident_id is not None:
            details["incident_id"] = incident_id
        if payload:
            details["payload"] = sanitize_payload(payload)

        self.log_operation(f"incident.{operation}", status, details)

    def log_store_request(self, method: str, url: str, status_code: int = None, status: str = "success"):
        """Log an HTTP call made by the dashboard's store client."""
        details = {"url": url}
        if status_code is not None:
            details["status_code"] = status_code

        self.log_operation(f"store.{method.lower()}", status, details)

    def log_list_view_event(self, event: str, details: Dict[str, Any] = None):
        """Log a list view state transition (sort, paging, collection refresh)."""
        message = f"Operation: listview.{event}, Status: applied"
        if details:
            message += f", Details: {details}"

        self.logger.debug(message)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def sanitize_payload(payload: Any, max_length: int = 100) -> Any:
    """Truncate long strings for logging."""
    if isinstance(payload, dict):
        return {k: sanitize_payload(v, max_length) for k, v in payload.items()}
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:max_length] + "..." if len(payload) > max_length else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, max_length) for item in payload]
    else:
        return payload
