"""
Domain error taxonomy.

Services raise these; the application maps each class to an HTTP status
code and renders the standard error envelope.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for recoverable domain failures"""

    status_code: int = 400
    code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            error["details"] = self.details
        return {"success": False, "error": error}


class ValidationError(DomainError):
    """Malformed or missing input, raised before any store mutation"""

    status_code = 400
    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """A referenced id does not exist"""

    status_code = 404
    code = "NOT_FOUND"


class ForbiddenError(DomainError):
    """The acting organization lacks the right to perform the operation"""

    status_code = 403
    code = "FORBIDDEN"


class ConflictError(DomainError):
    """The operation conflicts with current state (duplicates, unavailable equipment, self-targeting, illegal transitions)"""

    status_code = 409
    code = "CONFLICT"
