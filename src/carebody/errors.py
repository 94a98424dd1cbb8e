"""
carebody.errors — Custom exception classes
==========================================

Defines the exception hierarchy for lifecycle operations.
Each exception stores full context for structured logging.

Expected business states (closed registration, past deadline, wrong
role while rendering) are never raised: they are ordinary phases and
actions. These exceptions cover explicit operations the caller asked
for, such as registering or responding to a consultation.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import json


class CareBodyError(Exception):
    """Base exception for all carebody package errors."""

    error_type = "CAREBODY_ERROR"

    def context(self) -> Dict[str, Any]:
        return {}

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message=str(self),
            context=self.context(),
            validation_errors=None,
        )


class SnapshotError(CareBodyError):
    """Raised when an entity snapshot cannot be validated."""

    error_type = "SNAPSHOT_VALIDATION_FAILURE"

    def __init__(
        self,
        entity_type: str,
        payload: Dict[str, Any],
        validation_errors: List[str],
    ):
        self.entity_type = entity_type
        self.payload = payload
        self.validation_errors = validation_errors
        super().__init__(
            f"{entity_type} snapshot failed validation: {validation_errors}"
        )

    def context(self) -> Dict[str, Any]:
        return {"entity_type": self.entity_type, "payload": self.payload}

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.error_type,
            message=str(self),
            context=self.context(),
            validation_errors=self.validation_errors,
        )


class PermissionDeniedError(CareBodyError):
    """Raised when a viewer lacks the capability an operation needs."""

    error_type = "PERMISSION_DENIED"

    def __init__(self, operation: str, viewer_id: Optional[str], role: Optional[str]):
        self.operation = operation
        self.viewer_id = viewer_id
        self.role = role
        super().__init__(
            f"Viewer {viewer_id or '<anonymous>'} ({role or 'no role'}) "
            f"is not allowed to {operation}"
        )

    def context(self) -> Dict[str, Any]:
        return {"operation": self.operation, "viewer_id": self.viewer_id, "role": self.role}


class InvalidTransitionError(CareBodyError):
    """Raised when a status change is not valid from the current status."""

    error_type = "INVALID_TRANSITION"

    def __init__(self, entity_type: str, entity_id: Optional[str], current: str, event: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.current = current
        self.event = event
        super().__init__(
            f"Invalid transition: {event} from {current} for {entity_type} {entity_id}"
        )

    def context(self) -> Dict[str, Any]:
        return {
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "current": self.current,
            "event": self.event,
        }


class RegistrationError(CareBodyError):
    """Base class for rejected campaign registrations."""

    error_type = "REGISTRATION_REJECTED"
    reason = "Registration failed"

    def __init__(self, campaign_id: Optional[str], viewer_id: Optional[str] = None):
        self.campaign_id = campaign_id
        self.viewer_id = viewer_id
        super().__init__(self.reason)

    def context(self) -> Dict[str, Any]:
        return {"campaign_id": self.campaign_id, "viewer_id": self.viewer_id}


class CampaignCancelledError(RegistrationError):
    reason = "Cannot register for a cancelled campaign"


class RegistrationClosedError(RegistrationError):
    reason = "Registration deadline has passed"


class CampaignStartedError(RegistrationError):
    reason = "Campaign already started or completed"


class AlreadyRegisteredError(RegistrationError):
    reason = "User already registered for this campaign"


class AnonymousViewerError(RegistrationError):
    reason = "Registration requires an identified user"


def _format_error_block(
    error_type: str,
    message: str,
    context: Dict[str, Any],
    validation_errors: Optional[List[str]],
) -> str:
    """Format a structured error block for logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " CAREBODY ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Message:      {message}",
    ]

    if context:
        lines.append("")
        lines.append(" ── CONTEXT " + "─" * 52)
        lines.append(_indent_json(context))

    if validation_errors:
        lines.append("")
        lines.append(" ── VALIDATION ERRORS " + "─" * 42)
        for error in validation_errors:
            lines.append(f" • {error}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Dict[str, Any], indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
