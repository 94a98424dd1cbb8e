"""
carebody.calendar_links — "Add to Calendar" links
=================================================

Builds a Google Calendar event-template URL for a campaign. The event
starts at ``campaignDate`` (or ``startDate``) and ends at ``endDate``,
falling back to the start when no end is known.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from .models import Campaign

GOOGLE_CALENDAR_URL = "https://www.google.com/calendar/render"


def _google_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def google_calendar_url(campaign: Campaign) -> Optional[str]:
    """Event-template URL for the campaign, or None without a start date."""
    start = campaign.campaign_date or campaign.start_date
    if start is None:
        return None
    end = campaign.end_date or start

    location = ""
    if campaign.location is not None:
        location = campaign.location.address or campaign.location.city or ""

    params = [
        ("action", "TEMPLATE"),
        ("text", quote(campaign.title or "Campaign", safe="")),
        ("dates", f"{_google_time(start)}/{_google_time(end)}"),
        ("details", quote(campaign.description or "", safe="")),
        ("location", quote(location, safe="")),
    ]
    return GOOGLE_CALENDAR_URL + "?" + "&".join(f"{k}={v}" for k, v in params)
