"""
carebody — Lifecycle core for time-bound care entities
======================================================

Phase evaluation, action resolution and countdowns for health campaigns
and telemedicine consultations. The package is persistence- and UI-free:
callers hand in entity snapshots and render what comes back.

Quick Start:
    from carebody import Campaign, Viewer, build_campaign_view

    campaign = Campaign.from_snapshot(api_response["campaign"])
    view = build_campaign_view(campaign, Viewer.from_user(current_user))
    view["primary"]          # "register", "closed", "already_registered", ...

Countdowns:
    from carebody import CountdownBoard, format_countdown

    board = CountdownBoard()
    board.show(campaign.id, campaign.registration_deadline,
               on_tick=lambda t: label.set(format_countdown(t)),
               on_expired=refetch)
    ...
    board.clear()            # on teardown

Configuration:
    import carebody
    settings = carebody.configure()   # reads .env / CAREBODY_* variables
"""

from typing import Any, Dict, Optional

from ._config import load_settings
from ._shared.logging_config import setup_logging, log_operation_error
from .enums import (
    Action,
    CampaignPhase,
    CampaignStatus,
    ConsultationPhase,
    ConsultationStatus,
    ConsultationType,
)
from .models import Campaign, Consultation, Location, Registration, Viewer
from ._lifecycle import (
    Capability,
    PendingRegistrations,
    Resolution,
    ViewerFlags,
    add_registration,
    auto_complete,
    build_registration_payload,
    can,
    cancel_campaign,
    check_registration,
    dismiss_consultation,
    due_for_auto_completion,
    effective_end,
    evaluate_campaign_phase,
    evaluate_consultation_phase,
    evaluate_phase,
    is_organizer,
    is_registration_open,
    resolve_action,
    respond_to_consultation,
    role_display_name,
)
from ._timing import (
    Countdown,
    CountdownBoard,
    ManualClock,
    ManualScheduler,
    SystemClock,
    ThreadingScheduler,
    decompose,
    format_countdown,
    start_countdown,
)
from .calendar_links import google_calendar_url
from .views import build_campaign_view, build_consultation_views, nearest_upcoming
from .errors import (
    CareBodyError,
    SnapshotError,
    PermissionDeniedError,
    InvalidTransitionError,
    RegistrationError,
    RegistrationClosedError,
    CampaignStartedError,
    CampaignCancelledError,
    AlreadyRegisteredError,
    AnonymousViewerError,
)
from .types import CountdownTick, CampaignView, ConsultationView


def configure(env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings and set up package logging.

    Args:
        env_file: Optional path to a .env file

    Returns:
        The loaded settings dict
    """
    settings = load_settings(env_file)
    setup_logging(settings["log_file"], settings["log_level"])
    return settings


__all__ = [
    "configure",
    "load_settings",
    "setup_logging",
    "log_operation_error",
    # Enums
    "Action",
    "CampaignPhase",
    "CampaignStatus",
    "ConsultationPhase",
    "ConsultationStatus",
    "ConsultationType",
    # Snapshots
    "Campaign",
    "Consultation",
    "Location",
    "Registration",
    "Viewer",
    # Lifecycle
    "Capability",
    "PendingRegistrations",
    "Resolution",
    "ViewerFlags",
    "add_registration",
    "auto_complete",
    "build_registration_payload",
    "can",
    "cancel_campaign",
    "check_registration",
    "dismiss_consultation",
    "due_for_auto_completion",
    "effective_end",
    "evaluate_campaign_phase",
    "evaluate_consultation_phase",
    "evaluate_phase",
    "is_organizer",
    "is_registration_open",
    "resolve_action",
    "respond_to_consultation",
    "role_display_name",
    # Timing
    "Countdown",
    "CountdownBoard",
    "ManualClock",
    "ManualScheduler",
    "SystemClock",
    "ThreadingScheduler",
    "decompose",
    "format_countdown",
    "start_countdown",
    # Views
    "google_calendar_url",
    "build_campaign_view",
    "build_consultation_views",
    "nearest_upcoming",
    # Errors
    "CareBodyError",
    "SnapshotError",
    "PermissionDeniedError",
    "InvalidTransitionError",
    "RegistrationError",
    "RegistrationClosedError",
    "CampaignStartedError",
    "CampaignCancelledError",
    "AlreadyRegisteredError",
    "AnonymousViewerError",
    # Types
    "CountdownTick",
    "CampaignView",
    "ConsultationView",
]
__version__ = "1.0.0"
