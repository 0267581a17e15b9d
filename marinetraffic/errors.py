# =============================================================================
# marinetraffic/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure the client can produce is one of the classes below.  Each one
# carries an ErrorKind so callers can match on `err.kind` instead of chaining
# isinstance() checks, and each kind belongs to a category that tells the
# user-facing layer how to report it:
#
#   configuration → MissingCredential, InvalidCredential
#   validation    → InvalidIdentifier, InvalidParameters
#   operational   → UpstreamError, TransportError, VesselNotFound
#
# Raw httpx exceptions never escape the client.  Anything that is NOT an
# HTTP or transport failure (a bug, a malformed payload) is propagated as-is.
# =============================================================================

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_PARAMETERS = "invalid_parameters"
    UPSTREAM_ERROR = "upstream_error"
    TRANSPORT_ERROR = "transport_error"
    NOT_FOUND = "not_found"

    @property
    def category(self) -> str:
        """Which bucket this kind is reported under."""
        if self in (ErrorKind.MISSING_CREDENTIAL, ErrorKind.INVALID_CREDENTIAL):
            return "configuration"
        if self in (ErrorKind.INVALID_IDENTIFIER, ErrorKind.INVALID_PARAMETERS):
            return "validation"
        return "operational"


class TrackingError(Exception):
    """Base class for every classified MarineTraffic failure."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Serialize for a tool response (see mcp_tools/server.py)."""
        return {
            "error": self.message,
            "kind": self.kind.value,
            "category": self.kind.category,
        }


class MissingCredential(TrackingError):
    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, message: str = "MarineTraffic API key is required"):
        super().__init__(message)


class InvalidCredential(TrackingError):
    kind = ErrorKind.INVALID_CREDENTIAL

    def __init__(self, message: str = "Invalid MarineTraffic API key"):
        super().__init__(message)


class InvalidIdentifier(TrackingError):
    kind = ErrorKind.INVALID_IDENTIFIER


class InvalidParameters(TrackingError):
    kind = ErrorKind.INVALID_PARAMETERS


class UpstreamError(TrackingError):
    """The API answered, but with a status we don't retry (or ran out of retries)."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, status: int, body: str, message: Optional[str] = None):
        super().__init__(message or f"MarineTraffic API error: {status} - {body}")
        self.status = status
        self.body = body

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["status"] = self.status
        result["body"] = self.body
        return result


class TransportError(TrackingError):
    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(
        self,
        message: str = "Network error while connecting to MarineTraffic API",
    ):
        super().__init__(message)


class VesselNotFound(TrackingError):
    kind = ErrorKind.NOT_FOUND
