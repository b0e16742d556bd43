"""Domain error taxonomy

Every service either returns the requested resource or raises exactly one of
these. The API layer renders them with their stable ``code`` and HTTP status.
"""

from typing import Any, Dict, List, Optional


class MenuError(Exception):
    """Base class for errors surfaced to API clients"""
    status_code = 500
    code = "internal_error"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundError(MenuError):
    """Referenced entity does not exist"""
    status_code = 404
    code = "not_found"


class ValidationError(MenuError):
    """Malformed input or a failed semantic precondition"""
    status_code = 400
    code = "validation_error"


class ConflictError(MenuError):
    """Uniqueness violation"""
    status_code = 409
    code = "conflict"


class HierarchyMismatchError(MenuError):
    """Category and menu ids given together do not belong to each other"""
    status_code = 400
    code = "hierarchy_mismatch"


FOREIGN_KEY_VIOLATION = "23503"


def translate_integrity_error(exc) -> MenuError:
    """Map a store constraint failure onto the taxonomy"""
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in str(orig):
        return NotFoundError("Referenced entity does not exist")
    return ConflictError("Request conflicts with existing data")
