# Area: Lifecycle
"""
Lifecycle rules for time-bound entities (campaigns and consultations).

This package contains:
- Status, phase and action enums
- The deadline evaluator (phase)
- The action resolver
- Role capabilities
- Status transitions and registration rules
"""

from ..enums import (
    Action,
    CampaignPhase,
    CampaignStatus,
    ConsultationPhase,
    ConsultationStatus,
    ConsultationType,
)
from .phase import (
    effective_end,
    evaluate_phase,
    evaluate_campaign_phase,
    evaluate_consultation_phase,
    is_registration_open,
)
from .resolver import (
    Resolution,
    ViewerFlags,
    resolve_action,
    resolve_campaign_action,
    resolve_consultation_action,
)
from .permissions import (
    Capability,
    ROLE_CAPABILITIES,
    can,
    can_manage_campaign,
    is_organizer,
    role_display_name,
)
from .transitions import (
    auto_complete,
    due_for_auto_completion,
    cancel_campaign,
    dismiss_consultation,
    respond_to_consultation,
)
from .registration import (
    PendingRegistrations,
    add_registration,
    build_registration_payload,
    check_registration,
)

__all__ = [
    "Action",
    "CampaignPhase",
    "CampaignStatus",
    "ConsultationPhase",
    "ConsultationStatus",
    "ConsultationType",
    "effective_end",
    "evaluate_phase",
    "evaluate_campaign_phase",
    "evaluate_consultation_phase",
    "is_registration_open",
    "Resolution",
    "ViewerFlags",
    "resolve_action",
    "resolve_campaign_action",
    "resolve_consultation_action",
    "Capability",
    "ROLE_CAPABILITIES",
    "can",
    "can_manage_campaign",
    "is_organizer",
    "role_display_name",
    "auto_complete",
    "due_for_auto_completion",
    "cancel_campaign",
    "dismiss_consultation",
    "respond_to_consultation",
    "PendingRegistrations",
    "add_registration",
    "build_registration_payload",
    "check_registration",
]
