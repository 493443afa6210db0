"""
Custom Exceptions for ProposalHub
=================================

Services raise these; the handlers registered in app.main turn them into
the JSON envelope with the matching HTTP status.

Usage:
    from app.core.exceptions import NotFoundError, ConflictError

    if not topic:
        raise NotFoundError("ProjectTopic", topic_id)
"""

from typing import Optional, Any, Dict, List


class ProposalHubError(Exception):
    """Base exception for all ProposalHub errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(ProposalHubError):
    """Input validation failed"""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        violations: Optional[List[Dict[str, str]]] = None,
        **details: Any
    ):
        if field:
            details["field"] = field
        if violations:
            details["violations"] = violations
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConflictError(ProposalHubError):
    """Uniqueness constraint would be violated"""

    # Reported as a plain bad request, like the rest of the input errors
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="CONFLICT", details=details)


# ============================================
# Authentication Errors
# ============================================

class AuthError(ProposalHubError):
    """Credential check failed"""

    status_code = 401

    def __init__(self, message: str = "Incorrect email or password."):
        super().__init__(message, code="AUTH_FAILED")


# ============================================
# Resource Errors (404-type)
# ============================================

class NotFoundError(ProposalHubError):
    """Requested record does not exist"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str, message: Optional[str] = None):
        super().__init__(
            message or f"{resource_type} with ID '{resource_id}' not found",
            code=f"{_snake_upper(resource_type)}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


# ============================================
# Storage Errors
# ============================================

class StorageError(ProposalHubError):
    """Persistence operation failed"""

    status_code = 500

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message, code="STORAGE_ERROR")
        if operation:
            self.details["operation"] = operation


def _snake_upper(name: str) -> str:
    out = []
    for i, ch in enumerate(name):
        if ch.isupper() and i > 0:
            out.append("_")
        out.append(ch.upper())
    return "".join(out)
