"""
Domain Exceptions - Error taxonomy shared by services and API handlers

Each exception carries the HTTP status it maps to; the global handlers in
taskboard.main render them into the standard response envelope.
"""

from typing import Any, Dict, Iterable, List, Optional


class TaskboardError(Exception):
    """Base class for all errors reported to API callers"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    """One or more field violations - always reported together"""

    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: List[Dict[str, str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors  # [{"field": "title", "message": "..."}]

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])


class NotFoundError(TaskboardError):
    """Identifier is well-formed but has no matching record"""

    status_code = 404
    default_message = "Resource not found"


class InvalidIdentifierError(TaskboardError):
    """Identifier is malformed (distinct from not found)"""

    status_code = 400
    default_message = "Invalid ID format"


class AuthenticationError(TaskboardError):
    """Missing, invalid or expired credentials"""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(TaskboardError):
    status_code = 403
    default_message = "Not allowed"


class InternalError(TaskboardError):
    status_code = 500


def field_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert pydantic error dicts into field-attributed messages.

    Request locations ("body", "query", "path") are dropped so that body and
    service-level validation report the same field names.
    """
    result = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if error.get("type") == "json_invalid":
            # loc carries the byte offset of the parse failure, not a field
            result.append({"field": "body", "message": "Malformed JSON body"})
            continue
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        message = error.get("msg", "Invalid value")
        if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
            message = str(error["ctx"]["error"])  # Drop pydantic's "Value error, " prefix
        result.append({"field": ".".join(loc) or "__root__", "message": message})
    return result
