"""Typed errors with structured, serializable context."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

SECRET_KEYS = frozenset({
    "password",
    "client_secret",
    "clientsecret",
    "secret",
    "token",
    "access_token",
    "refresh_token",
    "credential_ref",
    "credentialref",
    "credentials",
    "authorization",
})

REDACTED = "***"


def redact(value: Any) -> Any:
    """Return a copy of ``value`` with secret-bearing keys masked."""
    if isinstance(value, dict):
        return {
            key: REDACTED if str(key).lower() in SECRET_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact(item) for item in value]
    return value


class BridgeError(Exception):
    """Base class for all errors raised by the toolkit."""

    code = "BRIDGE_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if code:
            self.code = code
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": redact(self.details),
            "timestamp": self.timestamp,
        }


class SourceConnectionError(BridgeError):
    """Transport failure talking to a source system."""

    code = "CONNECTION_ERROR"

    def __init__(self, message: str, profile: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message, {"profile": profile, "cause": str(cause) if cause else None})
        self.profile = profile
        self.cause = cause


class AuthenticationError(BridgeError):
    """The source system rejected the credentials."""

    code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str, profile: Optional[str] = None):
        super().__init__(message, {"profile": profile})
        self.profile = profile


class RemoteProtocolError(BridgeError):
    """The remote returned a structured error response."""

    code = "REMOTE_PROTOCOL_ERROR"

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message, {"statusCode": status_code, "response": response})
        self.status_code = status_code
        self.response = response


class TransportTimeout(BridgeError):
    """An adapter operation exceeded its timeout."""

    code = "TRANSPORT_TIMEOUT"

    def __init__(self, operation: str, timeout_ms: float):
        super().__init__(
            f"{operation} timed out after {timeout_ms}ms",
            {"operation": operation, "timeoutMs": timeout_ms},
        )
        self.operation = operation
        self.timeout_ms = timeout_ms


class ValidationError(BridgeError):
    """Input was missing or invalid."""

    code = "VALIDATION_ERROR"


class RuleValidationError(ValidationError):
    """Input failed schema validation."""

    code = "RULE_VALIDATION_ERROR"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message, {"errors": list(errors or [])})
        self.errors = list(errors or [])


class NotFoundError(BridgeError):
    """A requested resource does not exist."""

    code = "NOT_FOUND"


class TransformError(BridgeError):
    """A field mapping produced an invalid value."""

    code = "TRANSFORM_ERROR"

    def __init__(self, message: str, object_id: Optional[str] = None, mapping: Optional[str] = None):
        super().__init__(message, {"objectId": object_id, "mapping": mapping})
        self.object_id = object_id
        self.mapping = mapping


class MigrationObjectError(BridgeError):
    """A migration object failed in one of its lifecycle phases."""

    code = "MIGRATION_OBJECT_ERROR"

    def __init__(self, message: str, phase: str, cause: Optional[BaseException] = None):
        super().__init__(message, {"phase": phase, "cause": str(cause) if cause else None})
        self.phase = phase
        self.cause = cause


class UnknownOperation(BridgeError):
    """The safety gate does not know the requested operation."""

    code = "UNKNOWN_OPERATION"

    def __init__(self, operation: str):
        super().__init__(f"Unknown operation: {operation}", {"operation": operation})
        self.operation = operation


class CheckpointError(BridgeError):
    """A checkpoint could not be read back."""

    code = "CHECKPOINT_ERROR"
