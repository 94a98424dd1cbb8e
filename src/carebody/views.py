"""
carebody.views — Per-viewer view payloads
=========================================

Combines the deadline evaluator and the action resolver into the plain
dictionaries the presentation layer renders (see ``carebody.types``).
Views are rebuilt from the latest snapshots on every render; nothing here
keeps state between calls.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from ._config import CALL_TYPES
from ._lifecycle.phase import evaluate_campaign_phase, evaluate_consultation_phase
from ._lifecycle.registration import PendingRegistrations
from ._lifecycle.resolver import (
    ViewerFlags,
    resolve_campaign_action,
    resolve_consultation_action,
)
from ._shared.timestamps import resolve_now, to_iso
from .calendar_links import google_calendar_url
from .enums import CampaignPhase, ConsultationPhase
from .models import Campaign, Consultation, Viewer
from .types import CampaignView, ConsultationView


def build_campaign_view(
    campaign: Campaign,
    viewer: Optional[Viewer] = None,
    now: Optional[datetime | str] = None,
    pending: Optional[PendingRegistrations] = None,
) -> CampaignView:
    """Phase, actions, countdown and calendar link for one campaign card."""
    now = resolve_now(now)
    phase = evaluate_campaign_phase(campaign, now)
    flags = ViewerFlags(registered=pending is not None and pending.is_registered(campaign, viewer))
    resolution = resolve_campaign_action(campaign, phase, viewer, flags)
    calendar_enabled = phase not in (CampaignPhase.CANCELLED, CampaignPhase.CLOSED)
    return CampaignView(
        id=campaign.id,
        phase=phase.value,
        primary=resolution.primary.value,
        secondary=[a.value for a in resolution.secondary],
        countdown_until=to_iso(resolution.countdown_until),
        calendar_enabled=calendar_enabled,
        calendar_url=google_calendar_url(campaign) if calendar_enabled else None,
    )


def nearest_upcoming(
    consultations: Iterable[Consultation],
    now: Optional[datetime | str] = None,
) -> Optional[Consultation]:
    """The upcoming video/audio consultation that starts soonest."""
    now = resolve_now(now)
    upcoming = [
        c for c in consultations
        if c.type.value in CALL_TYPES
        and evaluate_consultation_phase(c, now) == ConsultationPhase.UPCOMING
    ]
    if not upcoming:
        return None
    return min(upcoming, key=lambda c: c.scheduled_at)


def build_consultation_views(
    consultations: Iterable[Consultation],
    viewer: Optional[Viewer] = None,
    now: Optional[datetime | str] = None,
) -> List[ConsultationView]:
    """Views for a viewer's consultation list, in input order."""
    now = resolve_now(now)
    consultations = list(consultations)
    nearest = nearest_upcoming(consultations, now)

    views: List[ConsultationView] = []
    for consultation in consultations:
        phase = evaluate_consultation_phase(consultation, now)
        flags = ViewerFlags(nearest_upcoming=consultation is nearest)
        resolution = resolve_consultation_action(consultation, phase, viewer, flags)
        views.append(ConsultationView(
            id=consultation.id,
            status=consultation.status.value,
            phase=phase.value,
            primary=resolution.primary.value,
            secondary=[a.value for a in resolution.secondary],
            countdown_until=to_iso(resolution.countdown_until),
        ))
    return views
