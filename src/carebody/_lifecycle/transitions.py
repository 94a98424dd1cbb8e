# Area: Lifecycle
"""
carebody._lifecycle.transitions — Status transitions
====================================================

Valid status changes for campaigns and consultations, as tables of
{current_status: {event: next_status}}. Operations here take a snapshot
and return the updated snapshot; persisting it is the caller's job.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .._shared.logging_config import log_operation_error
from .._shared.timestamps import resolve_now
from ..errors import InvalidTransitionError, PermissionDeniedError
from ..models import Campaign, Consultation, Viewer
from ..enums import (
    CampaignStatus,
    ConsultationPhase,
    ConsultationStatus,
)
from .permissions import Capability, can, can_manage_campaign
from .phase import evaluate_consultation_phase

logger = logging.getLogger("carebody.transitions")


class ConsultationEvent(Enum):
    ACCEPT = "accept"
    DENY = "deny"
    START = "start"
    COMPLETE = "completed"
    CANCEL = "cancel"


class CampaignEvent(Enum):
    START = "start"
    COMPLETE = "complete"
    CANCEL = "cancel"


CONSULTATION_TRANSITIONS: Dict[ConsultationStatus, Dict[ConsultationEvent, ConsultationStatus]] = {
    ConsultationStatus.REQUESTED: {
        ConsultationEvent.ACCEPT: ConsultationStatus.SCHEDULED,
        ConsultationEvent.DENY: ConsultationStatus.DENIED,
        ConsultationEvent.CANCEL: ConsultationStatus.CANCELLED,
    },
    ConsultationStatus.SCHEDULED: {
        ConsultationEvent.START: ConsultationStatus.IN_PROGRESS,
        ConsultationEvent.COMPLETE: ConsultationStatus.COMPLETED,
        ConsultationEvent.CANCEL: ConsultationStatus.CANCELLED,
    },
    ConsultationStatus.IN_PROGRESS: {
        ConsultationEvent.COMPLETE: ConsultationStatus.COMPLETED,
    },
    ConsultationStatus.COMPLETED: {},
    ConsultationStatus.CANCELLED: {},
    ConsultationStatus.DENIED: {},
}

CAMPAIGN_TRANSITIONS: Dict[CampaignStatus, Dict[CampaignEvent, CampaignStatus]] = {
    CampaignStatus.UPCOMING: {
        CampaignEvent.START: CampaignStatus.ACTIVE,
        CampaignEvent.CANCEL: CampaignStatus.CANCELLED,
    },
    CampaignStatus.ACTIVE: {
        CampaignEvent.COMPLETE: CampaignStatus.COMPLETED,
        CampaignEvent.CANCEL: CampaignStatus.CANCELLED,
    },
    CampaignStatus.COMPLETED: {},
    CampaignStatus.CANCELLED: {},
}

# Capability each consultation response needs
RESPONSE_CAPABILITIES = {
    ConsultationEvent.ACCEPT: Capability.RESPOND_CONSULTATION,
    ConsultationEvent.DENY: Capability.RESPOND_CONSULTATION,
    ConsultationEvent.COMPLETE: Capability.DISMISS_CONSULTATION,
}


def can_transition_consultation(status: ConsultationStatus, event: ConsultationEvent) -> bool:
    return event in CONSULTATION_TRANSITIONS.get(status, {})


def can_transition_campaign(status: CampaignStatus, event: CampaignEvent) -> bool:
    return event in CAMPAIGN_TRANSITIONS.get(status, {})


def _apply_consultation(consultation: Consultation, event: ConsultationEvent) -> Consultation:
    if not can_transition_consultation(consultation.status, event):
        error = InvalidTransitionError(
            "consultation", consultation.id, consultation.status.value, event.value
        )
        log_operation_error(error)
        raise error
    next_status = CONSULTATION_TRANSITIONS[consultation.status][event]
    logger.info(
        f"[{consultation.id}] Consultation: {consultation.status.value} → {next_status.value}"
    )
    return consultation.model_copy(update={"status": next_status})


def respond_to_consultation(
    consultation: Consultation,
    viewer: Optional[Viewer],
    decision: str,
) -> Consultation:
    """
    Apply a provider/staff response to a consultation.

    Args:
        consultation: Current snapshot
        viewer: Acting user
        decision: "accept", "deny" or "completed"

    Returns:
        Updated consultation snapshot

    Raises:
        ValueError: If decision is not one of the three responses
        PermissionDeniedError: If the viewer's role cannot give this response
        InvalidTransitionError: If the response is invalid for the current status
    """
    try:
        event = ConsultationEvent(decision)
    except ValueError:
        raise ValueError(f"Unknown consultation response: {decision!r}") from None
    if event not in RESPONSE_CAPABILITIES:
        raise ValueError(f"Unknown consultation response: {decision!r}")

    if not can(viewer, RESPONSE_CAPABILITIES[event]):
        error = PermissionDeniedError(
            f"{event.value} consultation",
            viewer.id if viewer else None,
            viewer.role if viewer else None,
        )
        log_operation_error(error)
        raise error
    return _apply_consultation(consultation, event)


def dismiss_consultation(
    consultation: Consultation,
    viewer: Optional[Viewer],
    now: Optional[datetime | str] = None,
) -> Consultation:
    """
    Dismiss a consultation whose time is over, marking it completed.

    Raises:
        PermissionDeniedError: If the viewer cannot dismiss consultations
        InvalidTransitionError: If the consultation has not ended or cannot complete
    """
    if not can(viewer, Capability.DISMISS_CONSULTATION):
        error = PermissionDeniedError(
            "dismiss consultation",
            viewer.id if viewer else None,
            viewer.role if viewer else None,
        )
        log_operation_error(error)
        raise error
    phase = evaluate_consultation_phase(consultation, now)
    if phase != ConsultationPhase.ENDED:
        error = InvalidTransitionError(
            "consultation", consultation.id, phase.value, "dismiss"
        )
        log_operation_error(error)
        raise error
    return _apply_consultation(consultation, ConsultationEvent.COMPLETE)


def auto_complete(consultation: Consultation, now: Optional[datetime | str] = None) -> Consultation:
    """
    Complete a scheduled consultation once its effective end has passed.

    Returns the snapshot unchanged when the rule does not apply.
    """
    if consultation.status != ConsultationStatus.SCHEDULED:
        return consultation
    now = resolve_now(now)
    if evaluate_consultation_phase(consultation, now) != ConsultationPhase.ENDED:
        return consultation
    logger.info(f"[{consultation.id}] Auto-completing consultation past its end")
    return _apply_consultation(consultation, ConsultationEvent.COMPLETE)


def cancel_campaign(campaign: Campaign, viewer: Optional[Viewer]) -> Campaign:
    """
    Cancel a campaign. Allowed for its organizer and MANAGE_CAMPAIGN roles.

    Raises:
        PermissionDeniedError: If the viewer may not cancel this campaign
        InvalidTransitionError: If the campaign is already completed or cancelled
    """
    if not can_manage_campaign(campaign, viewer):
        error = PermissionDeniedError(
            "cancel campaign",
            viewer.id if viewer else None,
            viewer.role if viewer else None,
        )
        log_operation_error(error)
        raise error
    if not can_transition_campaign(campaign.status, CampaignEvent.CANCEL):
        error = InvalidTransitionError(
            "campaign", campaign.id, campaign.status.value, CampaignEvent.CANCEL.value
        )
        log_operation_error(error)
        raise error
    next_status = CAMPAIGN_TRANSITIONS[campaign.status][CampaignEvent.CANCEL]
    logger.info(f"[{campaign.id}] Campaign: {campaign.status.value} → {next_status.value}")
    return campaign.model_copy(update={"status": next_status})


def due_for_auto_completion(
    consultations: Iterable[Consultation],
    now: Optional[datetime | str] = None,
) -> List[Consultation]:
    """Consultations the caller should persist as completed."""
    now = resolve_now(now)
    return [c for c in consultations if auto_complete(c, now) is not c]
