"""
carebody.models — Entity snapshot models
========================================

Pydantic models for the documents the persistence/API layer hands us.
Snapshots arrive in the API's camelCase JSON shape (``registrationDeadline``,
``scheduledAt``, ``_id``) and are validated into frozen models:

    campaign = Campaign.from_snapshot(api_response["campaign"])
    viewer = Viewer.from_user(current_user)

Timestamps are parsed leniently: a missing or unreadable timestamp becomes
``None`` instead of failing validation, so the phase evaluator can report
the entity as UNKNOWN. Identifiers may be plain strings, Mongo ``$oid``
wrappers or populated documents; they are reduced to their string id.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ._config import ROLES
from .enums import CampaignStatus, ConsultationStatus, ConsultationType
from ._shared.logging_config import log_operation_error
from ._shared.timestamps import parse_timestamp
from .errors import SnapshotError

logger = logging.getLogger("carebody.models")


def _ref_id(value: Any) -> Optional[str]:
    """Reduce a user/entity reference to its string id."""
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        for key in ("_id", "id", "$oid"):
            if value.get(key) is not None:
                return _ref_id(value[key])
        return None
    return str(value)


class _Snapshot(BaseModel):
    """Base for all snapshot models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_mongo_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and "id" not in data and "_id" in data:
            data = dict(data)
            data["id"] = data["_id"]
        return data

    @classmethod
    def from_snapshot(cls, payload: Any):
        """
        Validate an API snapshot.

        Raises:
            SnapshotError: If the payload cannot be validated
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            raw = payload if isinstance(payload, dict) else {"value": repr(payload)}
            error = SnapshotError(cls.__name__, raw, errors)
            log_operation_error(error)
            raise error from e


class Viewer(_Snapshot):
    """Identity and role of the user phases and actions are resolved for."""

    id: Optional[str] = None
    role: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Optional[str]:
        return _ref_id(value)

    @field_validator("role", mode="before")
    @classmethod
    def _role(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        role = str(value).strip().lower()
        if role not in ROLES:
            logger.debug("Unknown role %r treated as no role", value)
            return None
        return role

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls()

    @classmethod
    def from_user(cls, user: Optional[Dict[str, Any]]) -> "Viewer":
        """Build a viewer from an auth-context user; None means anonymous."""
        if not user:
            return cls.anonymous()
        return cls.from_snapshot(user)

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


class Location(_Snapshot):
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    zip_code: Optional[str] = None


class Registration(_Snapshot):
    """One user's registration for a campaign."""

    user: Optional[str] = None
    preferred_date: Optional[datetime] = None
    preferred_time: str = ""
    notes: str = ""
    registered_at: Optional[datetime] = None

    @field_validator("user", mode="before")
    @classmethod
    def _user(cls, value: Any) -> Optional[str]:
        return _ref_id(value)

    @field_validator("preferred_date", "registered_at", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)


class Campaign(_Snapshot):
    """A health campaign with a registration window."""

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    type: Optional[str] = None
    status: CampaignStatus = CampaignStatus.UPCOMING
    organizer: Optional[str] = None
    registration_deadline: Optional[datetime] = None
    campaign_date: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[Location] = None
    capacity: int = 0
    registered: int = 0
    registrations: Tuple[Registration, ...] = ()

    @field_validator("id", "organizer", mode="before")
    @classmethod
    def _refs(cls, value: Any) -> Optional[str]:
        return _ref_id(value)

    @field_validator(
        "registration_deadline", "campaign_date", "start_date", "end_date",
        mode="before",
    )
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)

    @field_validator("registrations", mode="before")
    @classmethod
    def _registrations(cls, value: Any) -> Any:
        return () if value is None else value

    def has_registration_for(self, user_id: Optional[str]) -> bool:
        """True when the fetched snapshot records a registration for user_id."""
        if user_id is None:
            return False
        return any(r.user == user_id for r in self.registrations)


class Consultation(_Snapshot):
    """A telemedicine consultation between a patient and a provider."""

    id: Optional[str] = None
    patient: Optional[str] = None
    provider: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    type: ConsultationType = ConsultationType.VIDEO
    provider_role: Optional[str] = None
    notes: str = ""
    status: ConsultationStatus = ConsultationStatus.REQUESTED

    @field_validator("id", "patient", "provider", mode="before")
    @classmethod
    def _refs(cls, value: Any) -> Optional[str]:
        return _ref_id(value)

    @field_validator("scheduled_at", "scheduled_end", mode="before")
    @classmethod
    def _timestamps(cls, value: Any) -> Optional[datetime]:
        return parse_timestamp(value)
