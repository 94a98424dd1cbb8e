# Area: Lifecycle
"""
carebody._lifecycle.registration — Campaign registration rules
==============================================================

Guards and payloads for registering a viewer to a campaign, plus the
membership view used while a registration request is in flight.

Membership has a single source of truth: the latest fetched campaign
snapshot. ``PendingRegistrations`` only bridges the gap between
dispatching a registration and the next successful fetch.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Set

from .._shared.logging_config import log_operation_error
from .._shared.timestamps import parse_timestamp, resolve_now, to_iso
from ..errors import (
    AlreadyRegisteredError,
    AnonymousViewerError,
    CampaignCancelledError,
    CampaignStartedError,
    RegistrationClosedError,
    RegistrationError,
)
from ..models import Campaign, Registration, Viewer
from ..enums import CampaignStatus
from .permissions import Capability, can

logger = logging.getLogger("carebody.registration")


def check_registration(
    campaign: Campaign,
    viewer: Optional[Viewer],
    now: Optional[datetime | str] = None,
) -> None:
    """
    Reject a registration the persistence layer would refuse.

    Checks, in order: identified viewer, cancelled campaign, registration
    deadline, campaign date, duplicate registration.

    Raises:
        RegistrationError: The matching subclass for the first failed check
    """
    viewer_id = viewer.id if viewer else None
    if viewer_id is None:
        raise AnonymousViewerError(campaign.id)
    if campaign.status == CampaignStatus.CANCELLED:
        raise CampaignCancelledError(campaign.id, viewer_id)
    now = resolve_now(now)
    if campaign.registration_deadline is not None and now > campaign.registration_deadline:
        raise RegistrationClosedError(campaign.id, viewer_id)
    if campaign.campaign_date is not None and now > campaign.campaign_date:
        raise CampaignStartedError(campaign.id, viewer_id)
    if campaign.has_registration_for(viewer_id):
        raise AlreadyRegisteredError(campaign.id, viewer_id)


def build_registration_payload(
    viewer: Optional[Viewer],
    notes: Optional[str] = None,
    preferred_date: Optional[datetime | str] = None,
    preferred_time: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the body of a "register" request.

    Self-registering viewers (REGISTER_CAMPAIGN) send notes only, their
    personal details come from the auth token; other roles may add a
    preferred date and time. Empty values are left out.
    """
    payload: Dict[str, Any] = {}
    if not can(viewer, Capability.REGISTER_CAMPAIGN):
        when = parse_timestamp(preferred_date)
        if when is not None:
            payload["preferredDate"] = to_iso(when)
        if preferred_time and preferred_time.strip():
            payload["preferredTime"] = preferred_time.strip()
    if notes and notes.strip():
        payload["notes"] = notes.strip()
    return payload


def add_registration(
    campaign: Campaign,
    viewer: Optional[Viewer],
    payload: Optional[Dict[str, Any]] = None,
    now: Optional[datetime | str] = None,
) -> Campaign:
    """
    Return the campaign with the viewer's registration appended.

    Raises:
        RegistrationError: If check_registration() rejects the request
            (logged at ERROR before it propagates)
    """
    now = resolve_now(now)
    try:
        check_registration(campaign, viewer, now)
    except RegistrationError as e:
        log_operation_error(e)
        raise
    payload = payload or {}
    registration = Registration(
        user=viewer.id,
        preferred_date=parse_timestamp(payload.get("preferredDate")),
        preferred_time=payload.get("preferredTime") or "",
        notes=payload.get("notes") or "",
        registered_at=now,
    )
    logger.info(f"[{campaign.id}] Registration added for {viewer.id}")
    return campaign.model_copy(update={
        "registrations": campaign.registrations + (registration,),
        "registered": campaign.registered + 1,
    })


class PendingRegistrations:
    """
    Optimistic "registered" flags for requests not yet confirmed by a fetch.

    Usage:
        pending = PendingRegistrations()
        if pending.begin(campaign.id):     # False for a double click
            api.register(campaign.id, payload)
        ...
        pending.refresh(fetched_campaign)  # clears the flag
    """

    def __init__(self) -> None:
        self._pending: Set[str] = set()

    def begin(self, campaign_id: str) -> bool:
        """Mark a registration as dispatched; False if one is already in flight."""
        if campaign_id in self._pending:
            logger.debug("Duplicate registration dispatch ignored for %s", campaign_id)
            return False
        self._pending.add(campaign_id)
        return True

    def fail(self, campaign_id: str) -> None:
        """Drop the flag after a rejected request."""
        self._pending.discard(campaign_id)

    def refresh(self, campaign: Campaign) -> None:
        """A successful fetch is the source of truth; clear the optimistic flag."""
        if campaign.id is not None:
            self._pending.discard(campaign.id)

    def is_pending(self, campaign_id: Optional[str]) -> bool:
        return campaign_id is not None and campaign_id in self._pending

    def is_registered(self, campaign: Campaign, viewer: Optional[Viewer]) -> bool:
        """Snapshot membership, or a dispatched registration awaiting the next fetch."""
        viewer_id = viewer.id if viewer else None
        if viewer_id is None:
            return False
        return campaign.has_registration_for(viewer_id) or self.is_pending(campaign.id)
