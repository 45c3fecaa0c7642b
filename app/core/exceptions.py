# app/core/exceptions.py
"""Domain errors raised by the services.

Routes translate these into HTTP errors; batch runs catch them per unit
(one user in one competition) and record them in the run report.
"""
from typing import Any


class SnapScapeError(Exception):
    """Base class for domain errors"""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        result = {"error": type(self).__name__, "message": self.message}
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(SnapScapeError):
    """Competition, submission or user does not exist"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, {"resource": resource, "id": identifier})


class PersistenceError(SnapScapeError):
    """Delete or insert against the result store failed"""


class InvariantViolation(SnapScapeError):
    """More than one Result for the same (competition, user, position)"""


class RatingNotAllowedError(SnapScapeError):
    """Rating rejected by the competition rules"""
