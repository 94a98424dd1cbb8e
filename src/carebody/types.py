"""
carebody.types — TypedDict schemas for presentation payloads
============================================================

This module documents the exact structure of the dictionaries handed to
the presentation layer: countdown ticks and per-viewer entity views.

All types are exported from the main package:

    from carebody import CountdownTick, CampaignView, ConsultationView
"""

from typing import List, Optional, TypedDict


class CountdownTick(TypedDict):
    """Remaining time passed to a countdown's on_tick callback.

    All fields are floored and non-negative. Use
    ``format_countdown(tick)`` for the padded ``"1d 02h:03m:04s"`` label.
    """
    days: int
    hours: int       # 0-23
    minutes: int     # 0-59
    seconds: int     # 0-59


class CampaignView(TypedDict):
    """What one viewer sees for one campaign card.

    Fields
    ------
    id : str or None
        Campaign identifier.
    phase : str
        CampaignPhase value: "open", "closed", "cancelled" or "unknown".
    primary : str
        The single primary Action value, e.g. "register".
    secondary : List[str]
        Extra Action values shown next to the primary, e.g. ["remove"].
    countdown_until : str or None
        ISO timestamp to count down to (the registration deadline), or None.
    calendar_enabled : bool
        Whether the "Add to Calendar" control is active.
    calendar_url : str or None
        Google Calendar template link, when a start date is known.
    """
    id: Optional[str]
    phase: str
    primary: str
    secondary: List[str]
    countdown_until: Optional[str]
    calendar_enabled: bool
    calendar_url: Optional[str]


class ConsultationView(TypedDict):
    """What one viewer sees for one consultation card.

    Fields
    ------
    id : str or None
        Consultation identifier.
    status : str
        Stored ConsultationStatus value.
    phase : str
        ConsultationPhase value: "upcoming", "active", "ended", ...
    primary : str
        The single primary Action value, e.g. "join".
    secondary : List[str]
        Extra Action values, e.g. ["accept", "deny"] or ["dismiss"].
    countdown_until : str or None
        Start time to count down to; only set on the nearest upcoming one.
    """
    id: Optional[str]
    status: str
    phase: str
    primary: str
    secondary: List[str]
    countdown_until: Optional[str]
