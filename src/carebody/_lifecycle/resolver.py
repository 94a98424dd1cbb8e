# Area: Lifecycle
"""
carebody._lifecycle.resolver — Action resolver
==============================================

Chooses the single primary control (or status chip) a viewer sees for an
entity, plus any secondary controls shown next to it. Read-only: invoking
the chosen action goes through the persistence collaborator.

Campaign precedence (first match wins):
    1. viewer already registered          -> ALREADY_REGISTERED
    2. phase CANCELLED                    -> CANCELLED (+ REMOVE for managers)
    3. phase CLOSED                       -> CLOSED
    4. organizer or MANAGE_CAMPAIGN role  -> CANCEL
    5. REGISTER_CAMPAIGN role             -> REGISTER
    6. otherwise                          -> NONE

Consultation (video/audio calls):
    UPCOMING -> NONE, with a countdown on the viewer's nearest one
    ACTIVE   -> JOIN unless already completed
    ENDED    -> TIME_OVER (+ DISMISS for eligible roles until completed)
    status requested + RESPOND_CONSULTATION -> secondary ACCEPT + DENY
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple, Union

from .._config import CALL_TYPES
from ..models import Campaign, Consultation, Viewer
from ..enums import (
    PRIMARY_ACTIONS,
    SECONDARY_ACTIONS,
    Action,
    CampaignPhase,
    ConsultationPhase,
    ConsultationStatus,
)
from .permissions import Capability, can, can_manage_campaign


@dataclass(frozen=True)
class ViewerFlags:
    """Per-viewer facts not carried by the entity snapshot.

    registered: an optimistic "registration dispatched" flag; the snapshot's
                own registrations are always checked as well.
    nearest_upcoming: this consultation is the viewer's next upcoming one.
    """
    registered: bool = False
    nearest_upcoming: bool = False


@dataclass(frozen=True)
class Resolution:
    """Exactly one primary action, optional secondary actions."""
    primary: Action
    secondary: Tuple[Action, ...] = ()
    countdown_until: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.primary not in PRIMARY_ACTIONS:
            raise ValueError(f"{self.primary} is not a primary action")
        extra = [a for a in self.secondary if a not in SECONDARY_ACTIONS]
        if extra:
            raise ValueError(f"Not secondary actions: {extra}")

    @property
    def actions(self) -> Tuple[Action, ...]:
        return (self.primary,) + self.secondary


def resolve_campaign_action(
    campaign: Campaign,
    phase: CampaignPhase,
    viewer: Optional[Viewer] = None,
    flags: Optional[ViewerFlags] = None,
) -> Resolution:
    viewer = viewer or Viewer.anonymous()
    flags = flags or ViewerFlags()
    countdown = campaign.registration_deadline if phase == CampaignPhase.OPEN else None

    registered = flags.registered or campaign.has_registration_for(viewer.id)
    if registered:
        return Resolution(Action.ALREADY_REGISTERED, countdown_until=countdown)

    manager = can_manage_campaign(campaign, viewer)
    if phase == CampaignPhase.CANCELLED:
        secondary = (Action.REMOVE,) if manager else ()
        return Resolution(Action.CANCELLED, secondary)
    if phase == CampaignPhase.CLOSED:
        return Resolution(Action.CLOSED)
    if phase == CampaignPhase.UNKNOWN:
        return Resolution(Action.NONE)
    if manager:
        return Resolution(Action.CANCEL, countdown_until=countdown)
    if can(viewer, Capability.REGISTER_CAMPAIGN):
        return Resolution(Action.REGISTER, countdown_until=countdown)
    return Resolution(Action.NONE, countdown_until=countdown)


def resolve_consultation_action(
    consultation: Consultation,
    phase: ConsultationPhase,
    viewer: Optional[Viewer] = None,
    flags: Optional[ViewerFlags] = None,
) -> Resolution:
    viewer = viewer or Viewer.anonymous()
    flags = flags or ViewerFlags()

    if phase == ConsultationPhase.CANCELLED:
        return Resolution(Action.CANCELLED)
    if phase == ConsultationPhase.DENIED:
        return Resolution(Action.DENIED)

    primary = Action.NONE
    secondary: List[Action] = []
    countdown: Optional[datetime] = None
    completed = consultation.status == ConsultationStatus.COMPLETED

    if consultation.type.value in CALL_TYPES:
        if phase == ConsultationPhase.UPCOMING:
            if flags.nearest_upcoming:
                countdown = consultation.scheduled_at
        elif phase == ConsultationPhase.ACTIVE:
            if not completed:
                primary = Action.JOIN
        elif phase == ConsultationPhase.ENDED:
            primary = Action.TIME_OVER
            if not completed and can(viewer, Capability.DISMISS_CONSULTATION):
                secondary.append(Action.DISMISS)

    if (consultation.status == ConsultationStatus.REQUESTED
            and can(viewer, Capability.RESPOND_CONSULTATION)):
        secondary.extend([Action.ACCEPT, Action.DENY])

    return Resolution(primary, tuple(secondary), countdown)


def resolve_action(
    entity: Union[Campaign, Consultation],
    phase: Union[CampaignPhase, ConsultationPhase],
    viewer: Optional[Viewer] = None,
    flags: Optional[ViewerFlags] = None,
) -> Resolution:
    """
    Resolve the action a viewer sees for an entity in a given phase.

    Args:
        entity: Campaign or Consultation snapshot
        phase: Phase from evaluate_phase() for the same entity
        viewer: Acting user; None is treated as anonymous
        flags: Per-viewer flags (optimistic registration, nearest upcoming)

    Returns:
        Resolution with exactly one primary action

    Raises:
        TypeError: If the entity and phase types do not match
    """
    if isinstance(entity, Campaign) and isinstance(phase, CampaignPhase):
        return resolve_campaign_action(entity, phase, viewer, flags)
    if isinstance(entity, Consultation) and isinstance(phase, ConsultationPhase):
        return resolve_consultation_action(entity, phase, viewer, flags)
    raise TypeError(
        f"Cannot resolve {type(phase).__name__} for {type(entity).__name__}"
    )
