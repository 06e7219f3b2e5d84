"""Tests for the settlement logging helpers."""

from unittest.mock import Mock

from structlog.testing import capture_logs

from press_rules.logging.config import (
    get_settlement_logger,
    log_contest_outcome,
    log_validation_failure,
)


class TestSettlementLogging:
    """Test structured logging of contest outcomes."""

    def test_contest_outcome_binds_context(self):
        """Test outcome logging binds the contest fields before emitting."""
        mock_logger = Mock()
        bound = mock_logger.bind.return_value

        log_contest_outcome(mock_logger, "match", "nassau", "final", 18, 2)

        mock_logger.bind.assert_called_once_with(
            contest_id="match",
            contest_type="nassau",
            contest_status="final",
            thru_hole=18,
            ledger_entries=2,
        )
        bound.info.assert_called_once_with("Contest computed")

    def test_contest_outcome_extra_context(self):
        mock_logger = Mock()
        bound = mock_logger.bind.return_value

        log_contest_outcome(mock_logger, "skins", "skins", "live", 7, 0, context={"carry": 2})

        bound.bind.assert_called_once_with(context={"carry": 2})
        bound.bind.return_value.info.assert_called_once_with("Contest computed")

    def test_validation_failure_is_a_warning(self):
        mock_logger = Mock()

        log_validation_failure(mock_logger, "wolf", "wolf", ["Unknown contest type: wolf"])

        mock_logger.bind.assert_called_once_with(
            contest_id="wolf",
            contest_type="wolf",
            errors=["Unknown contest type: wolf"],
            error_count=1,
        )
        mock_logger.bind.return_value.warning.assert_called_once_with("Contest config rejected")

    def test_settlement_logger_carries_audit_context(self):
        """Test the settlement logger tags every event with its subsystem."""
        logger = get_settlement_logger("press_rules.tests")

        with capture_logs() as logs:
            log_contest_outcome(logger, "match", "nassau", "final", 18, 2)

        (event,) = logs
        assert event["event"] == "Contest computed"
        assert event["subsystem"] == "settlement"
        assert event["audit_trail"] is True
        assert event["log_level"] == "info"
