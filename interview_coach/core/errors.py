"""
Domain error taxonomy.

Services raise these; the application maps each one to an HTTP status and a
JSON body of the form {"error": <message>, "details": {...}}.
"""
from typing import Any, Dict, Optional


class InterviewCoachError(Exception):
    """Base class for errors surfaced to API clients."""
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class NotFoundError(InterviewCoachError):
    """Referenced session, template or persona does not exist."""
    status_code = 404


class ValidationError(InterviewCoachError):
    """Malformed payload or an operation the session's status does not allow."""
    status_code = 400

    @classmethod
    def for_fields(cls, message: str, field_errors: Dict[str, list]) -> "ValidationError":
        return cls(message, details={"fieldErrors": field_errors})


class UnauthorizedError(InterviewCoachError):
    """Missing or invalid identity."""
    status_code = 401


class UpstreamFailureError(InterviewCoachError):
    """The completion service call failed."""
    status_code = 500
