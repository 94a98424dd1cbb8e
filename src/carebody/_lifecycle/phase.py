# Area: Lifecycle
"""
carebody._lifecycle.phase — Deadline evaluator
==============================================

Computes where a campaign or consultation is in its lifecycle relative to
"now". Pure functions: nothing is persisted here. Callers that want the
auto-completion rule applied use ``transitions.auto_complete``.

Status-derived phases always win over time-derived ones, so a cancelled
entity reports CANCELLED whatever the clock says. For a fixed status the
time-derived phase only moves forward as ``now`` increases.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Union

from .._config import DEFAULT_CONSULTATION_MINUTES
from .._shared.timestamps import resolve_now
from ..models import Campaign, Consultation
from ..enums import (
    CampaignPhase,
    CampaignStatus,
    ConsultationPhase,
    ConsultationStatus,
)

Phase = Union[CampaignPhase, ConsultationPhase]


def effective_end(
    consultation: Consultation,
    default_minutes: int = DEFAULT_CONSULTATION_MINUTES,
) -> Optional[datetime]:
    """scheduledEnd if set, else scheduledAt + default_minutes; None without a start."""
    if consultation.scheduled_at is None:
        return None
    if consultation.scheduled_end is not None:
        return consultation.scheduled_end
    return consultation.scheduled_at + timedelta(minutes=default_minutes)


def evaluate_campaign_phase(campaign: Campaign, now: Optional[datetime | str] = None) -> CampaignPhase:
    if campaign.status == CampaignStatus.CANCELLED:
        return CampaignPhase.CANCELLED
    if campaign.registration_deadline is None:
        return CampaignPhase.UNKNOWN
    now = resolve_now(now)
    if now > campaign.registration_deadline:
        return CampaignPhase.CLOSED
    return CampaignPhase.OPEN


def evaluate_consultation_phase(
    consultation: Consultation,
    now: Optional[datetime | str] = None,
    default_minutes: int = DEFAULT_CONSULTATION_MINUTES,
) -> ConsultationPhase:
    if consultation.status == ConsultationStatus.CANCELLED:
        return ConsultationPhase.CANCELLED
    if consultation.status == ConsultationStatus.DENIED:
        return ConsultationPhase.DENIED
    end = effective_end(consultation, default_minutes)
    if consultation.scheduled_at is None or end is None:
        return ConsultationPhase.UNKNOWN
    now = resolve_now(now)
    if now > end:
        return ConsultationPhase.ENDED
    if now >= consultation.scheduled_at:
        return ConsultationPhase.ACTIVE
    return ConsultationPhase.UPCOMING


def evaluate_phase(
    entity: Union[Campaign, Consultation],
    now: Optional[datetime | str] = None,
) -> Phase:
    """
    Evaluate the lifecycle phase of a campaign or consultation.

    Args:
        entity: Campaign or Consultation snapshot
        now: Evaluation time (datetime, naive taken as UTC, or ISO string);
            defaults to the current UTC time

    Returns:
        CampaignPhase or ConsultationPhase

    Raises:
        TypeError: If entity is neither a Campaign nor a Consultation
    """
    if isinstance(entity, Campaign):
        return evaluate_campaign_phase(entity, now)
    if isinstance(entity, Consultation):
        return evaluate_consultation_phase(entity, now)
    raise TypeError(f"Cannot evaluate phase of {type(entity).__name__}")


def is_registration_open(campaign: Campaign, now: Optional[datetime | str] = None) -> bool:
    return evaluate_campaign_phase(campaign, now) == CampaignPhase.OPEN
