# Area: Lifecycle
"""
carebody._lifecycle.permissions — Role capabilities
===================================================

Table-driven authorization: each role maps to a set of capabilities and
call sites ask ``can(viewer, Capability.X)`` instead of comparing role
strings. A viewer with no role (anonymous or stale) has no capabilities.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Campaign, Viewer


class Capability(Enum):
    MANAGE_CAMPAIGN = "manage_campaign"            # cancel / remove campaigns
    REGISTER_CAMPAIGN = "register_campaign"        # self-registration
    RESPOND_CONSULTATION = "respond_consultation"  # accept / deny requests
    DISMISS_CONSULTATION = "dismiss_consultation"  # mark ended calls completed


ROLE_CAPABILITIES: Dict[str, FrozenSet[Capability]] = {
    "admin": frozenset({
        Capability.MANAGE_CAMPAIGN,
        Capability.DISMISS_CONSULTATION,
    }),
    "ngo": frozenset({
        Capability.MANAGE_CAMPAIGN,
    }),
    "health_worker": frozenset({
        Capability.MANAGE_CAMPAIGN,
        Capability.RESPOND_CONSULTATION,
        Capability.DISMISS_CONSULTATION,
    }),
    "doctor": frozenset({
        Capability.RESPOND_CONSULTATION,
        Capability.DISMISS_CONSULTATION,
    }),
    "patient": frozenset({
        Capability.REGISTER_CAMPAIGN,
    }),
    "user": frozenset(),
}

ROLE_DISPLAY_NAMES = {
    "admin": "Administrator",
    "doctor": "Doctor",
    "health_worker": "Health Worker",
    "ngo": "NGO",
    "patient": "Patient",
    "user": "User",
}


def capabilities_for(role: Optional[str]) -> FrozenSet[Capability]:
    if not role:
        return frozenset()
    return ROLE_CAPABILITIES.get(role, frozenset())


def can(viewer: Optional["Viewer"], capability: Capability) -> bool:
    """True when the viewer's role grants the capability."""
    if viewer is None:
        return False
    return capability in capabilities_for(viewer.role)


def is_organizer(campaign: "Campaign", viewer: Optional["Viewer"]) -> bool:
    """True when the viewer created the campaign."""
    if viewer is None or viewer.id is None or campaign.organizer is None:
        return False
    return campaign.organizer == viewer.id


def can_manage_campaign(campaign: "Campaign", viewer: Optional["Viewer"]) -> bool:
    """Organizers manage their own campaigns; MANAGE_CAMPAIGN roles manage any."""
    return is_organizer(campaign, viewer) or can(viewer, Capability.MANAGE_CAMPAIGN)


def role_display_name(role: Optional[str]) -> str:
    """Human-readable role name; unknown roles are title-cased."""
    if not role:
        return "User"
    if role in ROLE_DISPLAY_NAMES:
        return ROLE_DISPLAY_NAMES[role]
    return role.replace("_", " ").title()
