"""
Domain exceptions mapped to HTTP responses by the handlers in ledger.main.
"""
from typing import Any, Dict, Optional
from fastapi import status


class LedgerError(Exception):
    """Base class for errors reported to the caller in the response envelope."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Something went wrong, please try again"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def extra(self) -> Dict[str, Any]:
        """Additional top-level fields for the error envelope."""
        return {}


class ValidationError(LedgerError):
    """Malformed or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthenticationError(LedgerError):
    """Missing, invalid or expired session, or bad credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please sign in first"

    def __init__(self, message: Optional[str] = None, clear_session: bool = False):
        super().__init__(message)
        self.clear_session = clear_session


class NotFoundError(LedgerError):
    """Entity absent or owned by someone else."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(LedgerError):
    """Unique constraint violation."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class ConfirmationRequiredError(LedgerError):
    """Deletion target still has dependent entries and force was not given."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "This item has related entries. Delete anyway?"

    def __init__(self, dependent_count: int, message: Optional[str] = None):
        super().__init__(message)
        self.dependent_count = dependent_count

    def extra(self) -> Dict[str, Any]:
        return {
            "requiresConfirmation": True,
            "data": {"dependentCount": self.dependent_count},
        }


class DependencyError(LedgerError):
    """An outbound call (LINE push) failed."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Could not send the message to LINE"
