# Area: Lifecycle Tests
"""Tests for role capabilities."""

from carebody._config import ROLES
from carebody._lifecycle.permissions import (
    ROLE_CAPABILITIES,
    Capability,
    can,
    can_manage_campaign,
    capabilities_for,
    is_organizer,
    role_display_name,
)
from carebody.models import Campaign, Viewer


class TestCapabilityTable:
    """Tests for ROLE_CAPABILITIES."""

    def test_every_role_has_an_entry(self):
        assert set(ROLE_CAPABILITIES) == set(ROLES)

    def test_campaign_managers(self):
        managers = {
            role for role, caps in ROLE_CAPABILITIES.items()
            if Capability.MANAGE_CAMPAIGN in caps
        }
        assert managers == {"admin", "ngo", "health_worker"}

    def test_responders(self):
        responders = {
            role for role, caps in ROLE_CAPABILITIES.items()
            if Capability.RESPOND_CONSULTATION in caps
        }
        assert responders == {"doctor", "health_worker"}

    def test_only_patients_register(self):
        registrants = {
            role for role, caps in ROLE_CAPABILITIES.items()
            if Capability.REGISTER_CAMPAIGN in caps
        }
        assert registrants == {"patient"}

    def test_every_capability_is_granted(self):
        granted = set().union(*ROLE_CAPABILITIES.values())
        assert granted == set(Capability)

    def test_plain_user_has_nothing(self):
        assert capabilities_for("user") == frozenset()

    def test_unknown_and_missing_roles_have_nothing(self):
        assert capabilities_for(None) == frozenset()
        assert capabilities_for("superuser") == frozenset()


class TestCan:
    """Tests for can()."""

    def test_role_grants_capability(self):
        assert can(Viewer(id="d1", role="doctor"), Capability.DISMISS_CONSULTATION) is True

    def test_role_lacks_capability(self):
        assert can(Viewer(id="p1", role="patient"), Capability.MANAGE_CAMPAIGN) is False

    def test_none_viewer(self):
        assert can(None, Capability.REGISTER_CAMPAIGN) is False

    def test_viewer_without_role(self):
        assert can(Viewer(id="x"), Capability.REGISTER_CAMPAIGN) is False

    def test_unknown_role_dropped_on_validation(self):
        viewer = Viewer.from_user({"_id": "x", "role": "superuser"})
        assert viewer.role is None
        assert can(viewer, Capability.MANAGE_CAMPAIGN) is False


class TestOrganizer:
    """Tests for is_organizer() and can_manage_campaign()."""

    def test_organizer_matches_id(self):
        campaign = Campaign(id="c1", organizer="u1")
        assert is_organizer(campaign, Viewer(id="u1", role="user")) is True
        assert is_organizer(campaign, Viewer(id="u2", role="user")) is False

    def test_populated_organizer_document(self):
        campaign = Campaign.from_snapshot({"_id": "c1", "organizer": {"_id": "u1", "name": "Ana"}})
        assert is_organizer(campaign, Viewer(id="u1")) is True

    def test_anonymous_never_organizer(self):
        assert is_organizer(Campaign(id="c1"), Viewer.anonymous()) is False

    def test_manager_role_manages_any_campaign(self):
        campaign = Campaign(id="c1", organizer="someone")
        assert can_manage_campaign(campaign, Viewer(id="n1", role="ngo")) is True
        assert can_manage_campaign(campaign, Viewer(id="d1", role="doctor")) is False


class TestRoleDisplayName:
    """Tests for role_display_name()."""

    def test_known_roles(self):
        assert role_display_name("admin") == "Administrator"
        assert role_display_name("health_worker") == "Health Worker"
        assert role_display_name("ngo") == "NGO"

    def test_unknown_role_title_cased(self):
        assert role_display_name("lab_technician") == "Lab Technician"

    def test_missing_role(self):
        assert role_display_name(None) == "User"
