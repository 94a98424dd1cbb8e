# Area: Shared Tests
"""Tests for error formatting and structured logging."""

import json
import logging

import pytest

from carebody._shared.logging_config import (
    JSONFormatter,
    TerminalFormatter,
    log_operation_error,
    setup_logging,
)
from carebody.errors import (
    CareBodyError,
    InvalidTransitionError,
    PermissionDeniedError,
    RegistrationClosedError,
    RegistrationError,
    SnapshotError,
)
from carebody._lifecycle.registration import add_registration
from carebody._lifecycle.transitions import cancel_campaign, respond_to_consultation
from carebody.models import Campaign, Consultation, Viewer


class TestErrorHierarchy:
    """Tests for the exception classes."""

    def test_all_share_base(self):
        for error in (
            SnapshotError("Campaign", {}, []),
            PermissionDeniedError("cancel campaign", "u1", "patient"),
            InvalidTransitionError("consultation", "k1", "completed", "accept"),
            RegistrationClosedError("c1", "p1"),
        ):
            assert isinstance(error, CareBodyError)

    def test_registration_reason_is_message(self):
        error = RegistrationClosedError("c1", "p1")
        assert isinstance(error, RegistrationError)
        assert str(error) == "Registration deadline has passed"

    def test_permission_message_for_anonymous(self):
        error = PermissionDeniedError("accept consultation", None, None)
        assert "<anonymous>" in str(error)
        assert "no role" in str(error)


class TestFormatErrorLog:
    """Tests for format_error_log()."""

    def test_transition_block(self):
        block = InvalidTransitionError("consultation", "k1", "completed", "accept").format_error_log()
        assert "CAREBODY ERROR" in block
        assert "INVALID_TRANSITION" in block
        assert '"entity_id": "k1"' in block

    def test_snapshot_block_lists_validation_errors(self):
        error = SnapshotError("Campaign", {"status": "postponed"}, ["status: bad value"])
        block = error.format_error_log()
        assert "VALIDATION ERRORS" in block
        assert "• status: bad value" in block
        assert "SNAPSHOT_VALIDATION_FAILURE" in block

    def test_unserializable_context_falls_back(self):
        error = SnapshotError("Campaign", {"bad": object()}, [])
        # default=str handles arbitrary objects
        assert "bad" in error.format_error_log()


class TestLogging:
    """Tests for logging setup and formatters."""

    def teardown_method(self):
        pkg_logger = logging.getLogger("carebody")
        for handler in list(pkg_logger.handlers):
            pkg_logger.removeHandler(handler)
            handler.close()
        pkg_logger.propagate = True
        pkg_logger.setLevel(logging.NOTSET)

    def test_json_formatter(self):
        record = logging.LogRecord("carebody.countdown", logging.INFO, __file__, 1, "tick %s", ("c1",), None)
        record.entity_id = "c1"
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "tick c1"
        assert data["level"] == "INFO"
        assert data["entity_id"] == "c1"

    def test_terminal_formatter_leaves_record_plain(self):
        record = logging.LogRecord("carebody", logging.WARNING, __file__, 1, "careful", (), None)
        text = TerminalFormatter(fmt="%(levelname)s %(message)s").format(record)
        assert "\033[33m" in text
        assert record.levelname == "WARNING"

    def test_setup_logging_writes_json_file(self, tmp_path):
        log_file = tmp_path / "logs" / "carebody.log"
        setup_logging(str(log_file), "INFO")
        logging.getLogger("carebody.transitions").info("Consultation: requested → scheduled")
        for handler in logging.getLogger("carebody").handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").strip().splitlines()
        entry = json.loads(lines[-1])
        assert entry["logger"] == "carebody.transitions"
        assert "scheduled" in entry["message"]

    def test_setup_logging_replaces_handlers(self, tmp_path):
        setup_logging(str(tmp_path / "a.log"))
        setup_logging(str(tmp_path / "b.log"))
        assert len(logging.getLogger("carebody").handlers) == 2

    def test_log_operation_error(self, tmp_path):
        log_file = tmp_path / "errors.log"
        setup_logging(str(log_file))
        log_operation_error(RegistrationClosedError("c1", "p1"))
        for handler in logging.getLogger("carebody").handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert entry["level"] == "ERROR"
        assert "REGISTRATION_REJECTED" in entry["message"]


class TestRejectedOperationsLogged:
    """Rejected operations log the structured error block before raising."""

    def test_rejected_registration(self, caplog):
        campaign = Campaign(id="c1", status="cancelled")
        with caplog.at_level("ERROR", logger="carebody"):
            with pytest.raises(RegistrationError):
                add_registration(campaign, Viewer(id="p1", role="patient"))
        assert "REGISTRATION_REJECTED" in caplog.text
        assert '"campaign_id": "c1"' in caplog.text

    def test_permission_denied(self, caplog):
        consultation = Consultation(id="k1", status="requested")
        with caplog.at_level("ERROR", logger="carebody"):
            with pytest.raises(PermissionDeniedError):
                respond_to_consultation(consultation, Viewer(id="p1", role="patient"), "accept")
        assert "PERMISSION_DENIED" in caplog.text

    def test_invalid_transition(self, caplog):
        campaign = Campaign(id="c1", status="completed")
        with caplog.at_level("ERROR", logger="carebody"):
            with pytest.raises(InvalidTransitionError):
                cancel_campaign(campaign, Viewer(id="a1", role="admin"))
        assert "INVALID_TRANSITION" in caplog.text

    def test_snapshot_error(self, caplog):
        with caplog.at_level("ERROR", logger="carebody"):
            with pytest.raises(SnapshotError):
                Campaign.from_snapshot("not a document")
        assert "SNAPSHOT_VALIDATION_FAILURE" in caplog.text

    def test_successful_operation_logs_no_error(self, caplog):
        campaign = Campaign(id="c1", status="active")
        with caplog.at_level("ERROR", logger="carebody"):
            cancel_campaign(campaign, Viewer(id="a1", role="admin"))
        assert caplog.records == []
