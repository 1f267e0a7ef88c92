"""Tests for audit logging of rule-check outcomes."""

from unittest.mock import Mock

from propfirm_app.logging.config import configure_logging, get_validation_logger, log_check_result
from propfirm_app.validation.checks import StrategyRuleValidator


class TestCheckLogging:
    """Test that every rule check leaves an audit entry."""

    def setup_method(self):
        """Set up a mock logger whose bind() returns itself."""
        configure_logging(level="DEBUG", format_json=True)

        self.mock_logger = Mock()
        self.mock_logger.bind.return_value = self.mock_logger

    def _bound_checks(self):
        return [
            call.kwargs["check_name"]
            for call in self.mock_logger.bind.call_args_list
            if "check_name" in call.kwargs
        ]

    def test_failed_check_logs_warning(self) -> None:
        """Test that an error-severity warning is logged at warning level."""
        log_check_result(
            self.mock_logger, "position_limit", True, "topstep",
            severity="error", context={"instrument": "ES"}
        )

        self.mock_logger.bind.assert_any_call(
            check_name="position_limit",
            check_result="EMITTED",
            firm="topstep",
            severity="error",
        )
        self.mock_logger.bind.assert_any_call(context={"instrument": "ES"})
        self.mock_logger.warning.assert_called_once_with("Rule check failed")
        self.mock_logger.debug.assert_not_called()

    def test_clear_check_logs_debug(self) -> None:
        """Test that a check with no warning is logged at debug level."""
        log_check_result(self.mock_logger, "consistency", False, "ftmo")

        self.mock_logger.bind.assert_called_once_with(
            check_name="consistency",
            check_result="CLEAR",
            firm="ftmo",
            severity=None,
        )
        self.mock_logger.debug.assert_called_once_with("Rule check evaluated")
        self.mock_logger.warning.assert_not_called()

    def test_validator_logs_every_check(self, make_bundle, make_strategy) -> None:
        """Test one entry per check, in check order, including clear checks."""
        validator = StrategyRuleValidator()
        validator.logger = self.mock_logger
        bundle = make_bundle()

        validator.run(bundle, bundle.tiers[50000], make_strategy(max_contracts=1), "ES")

        assert self._bound_checks() == [
            "position_limit", "risk_limit", "consistency", "drawdown", "automation_policy",
        ]
        # Only the drawdown description fires for this strategy
        assert self.mock_logger.debug.call_count == 5
        self.mock_logger.warning.assert_not_called()

    def test_validation_logger_binds_subsystem(self) -> None:
        """Test that the validation logger carries its audit context."""
        logger = get_validation_logger("propfirm_app.validation.checks")

        assert logger is not None
        assert hasattr(logger, "bind")
