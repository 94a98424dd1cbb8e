# Area: Views Tests
"""Tests for Google Calendar links."""

from urllib.parse import parse_qs, urlparse

from carebody.calendar_links import google_calendar_url
from carebody.models import Campaign


def make_campaign(**overrides):
    data = {
        "_id": "c1",
        "title": "Free eye screening",
        "description": "Bring your glasses & ID",
        "campaignDate": "2025-01-12T09:00:00Z",
        "endDate": "2025-01-12T17:00:00Z",
        "location": {"address": "12 Market Rd", "city": "Kumasi"},
    }
    data.update(overrides)
    return Campaign.from_snapshot(data)


def query(url):
    return parse_qs(urlparse(url).query)


class TestGoogleCalendarUrl:
    """Tests for google_calendar_url()."""

    def test_template_url(self):
        url = google_calendar_url(make_campaign())
        assert url.startswith("https://www.google.com/calendar/render?action=TEMPLATE")
        params = query(url)
        assert params["text"] == ["Free eye screening"]
        assert params["dates"] == ["20250112T090000Z/20250112T170000Z"]
        assert params["details"] == ["Bring your glasses & ID"]
        assert params["location"] == ["12 Market Rd"]

    def test_falls_back_to_start_date(self):
        url = google_calendar_url(make_campaign(campaignDate=None, startDate="2025-01-13T08:00:00Z"))
        assert query(url)["dates"] == ["20250113T080000Z/20250112T170000Z"]

    def test_end_falls_back_to_start(self):
        url = google_calendar_url(make_campaign(endDate=None))
        assert query(url)["dates"] == ["20250112T090000Z/20250112T090000Z"]

    def test_city_when_no_address(self):
        url = google_calendar_url(make_campaign(location={"city": "Kumasi"}))
        assert query(url)["location"] == ["Kumasi"]

    def test_no_start_no_link(self):
        assert google_calendar_url(make_campaign(campaignDate=None)) is None
