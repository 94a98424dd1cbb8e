"""
carebody.enums — Status, phase and action enums
===============================================

Statuses are what persistence stores. Phases are derived from status,
timestamps and the current time. Actions are what a single viewer is
offered for a single entity.

Campaign phase precedence (first match wins):
    CANCELLED (status) > CLOSED (past registration deadline) > OPEN

Consultation phase precedence (first match wins):
    CANCELLED / DENIED (status) > ENDED (past effective end)
    > ACTIVE (inside the window) > UPCOMING
"""

from enum import Enum


class CampaignStatus(Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ConsultationStatus(Enum):
    REQUESTED = "requested"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DENIED = "denied"


class ConsultationType(Enum):
    VIDEO = "video"
    AUDIO = "audio"
    CHAT = "chat"


class CampaignPhase(Enum):
    """Registration phase of a campaign."""
    UNKNOWN = "unknown"        # No registration deadline set
    OPEN = "open"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class ConsultationPhase(Enum):
    """Time phase of a consultation."""
    UNKNOWN = "unknown"        # No scheduledAt set
    UPCOMING = "upcoming"
    ACTIVE = "active"
    ENDED = "ended"
    CANCELLED = "cancelled"
    DENIED = "denied"


# Lifecycle order of time-derived phases; status-derived phases sit outside it
CAMPAIGN_PHASE_ORDER = {
    CampaignPhase.OPEN: 0,
    CampaignPhase.CLOSED: 1,
}

CONSULTATION_PHASE_ORDER = {
    ConsultationPhase.UPCOMING: 0,
    ConsultationPhase.ACTIVE: 1,
    ConsultationPhase.ENDED: 2,
}


class Action(Enum):
    """
    Controls and statuses exposed to a viewer.

    Primary (exactly one per entity per viewer):
        REGISTER, ALREADY_REGISTERED, CLOSED, CANCELLED, CANCEL,
        JOIN, TIME_OVER, DENIED, NONE
    Secondary (zero or more, alongside the primary):
        REMOVE, DISMISS, ACCEPT, DENY
    """
    REGISTER = "register"
    ALREADY_REGISTERED = "already_registered"
    CLOSED = "closed"
    CANCELLED = "cancelled"
    CANCEL = "cancel"
    REMOVE = "remove"
    ACCEPT = "accept"
    DENY = "deny"
    JOIN = "join"
    TIME_OVER = "time_over"
    DISMISS = "dismiss"
    DENIED = "denied"
    NONE = "none"


PRIMARY_ACTIONS = frozenset({
    Action.REGISTER,
    Action.ALREADY_REGISTERED,
    Action.CLOSED,
    Action.CANCELLED,
    Action.CANCEL,
    Action.JOIN,
    Action.TIME_OVER,
    Action.DENIED,
    Action.NONE,
})

SECONDARY_ACTIONS = frozenset({
    Action.REMOVE,
    Action.DISMISS,
    Action.ACCEPT,
    Action.DENY,
})
