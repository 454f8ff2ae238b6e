"""
Domain exceptions raised by the entity store.

"Not found" is deliberately absent from this hierarchy: stores return None
for a missing id and the route layer turns that into a 404.
"""

from typing import Any


class VetClinicError(Exception):
    """Base class for errors the API layer knows how to render."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ReferenceConflictError(VetClinicError):
    """A delete was refused because other records still point at the target."""

    status_code = 409


class DuplicateUsernameError(VetClinicError):
    status_code = 409
