"""Tests for report assembly and rendering."""

import pytest

from propfirm_app.validation.report import (
    ReportStatus,
    Severity,
    TierSummary,
    ValidationWarning,
    WarningType,
    build_report,
)


def _warning(severity: Severity) -> ValidationWarning:
    return ValidationWarning(type=WarningType.INFO, severity=severity, message=severity.value)


@pytest.fixture
def summary(make_bundle) -> TierSummary:
    bundle = make_bundle()
    return TierSummary.from_tier(bundle, 50000, bundle.tiers[50000])


class TestBuildReport:
    """Test status aggregation."""

    @pytest.mark.parametrize("severities, status, is_valid", [
        ([Severity.ERROR], ReportStatus.INVALID, False),
        ([Severity.INFO, Severity.WARNING, Severity.ERROR], ReportStatus.INVALID, False),
        ([Severity.WARNING, Severity.INFO], ReportStatus.WARNINGS, True),
        ([Severity.INFO, Severity.INFO], ReportStatus.VALID, True),
        ([], ReportStatus.VALID, True),
    ])
    def test_status_aggregation(self, summary, severities, status, is_valid) -> None:
        """Test the verdict for each mix of severities."""
        report = build_report([_warning(s) for s in severities], summary)

        assert report.status is status
        assert report.is_valid is is_valid

    def test_warning_order_preserved(self, summary) -> None:
        """Test that warnings keep the order they were produced in."""
        warnings = [_warning(Severity.INFO), _warning(Severity.ERROR), _warning(Severity.WARNING)]
        report = build_report(warnings, summary)

        assert list(report.warnings) == warnings
        assert report.errors == [warnings[1]]


class TestReportRendering:
    """Test the camelCase output shape."""

    def test_to_dict_shape(self, summary) -> None:
        """Test the top-level keys and the tier echo."""
        report = build_report([_warning(Severity.INFO)], summary)
        rendered = report.to_dict()

        assert set(rendered) == {"isValid", "status", "warnings", "firmRules"}
        assert rendered["status"] == "valid"
        assert rendered["firmRules"] == {
            "firmName": "Test Firm",
            "accountSize": 50000,
            "profitTarget": 3000,
            "dailyLossLimit": 1000,
            "maxDrawdown": 2000,
            "drawdownType": "trailing",
            "maxContracts": {
                "ES": 5, "NQ": 5, "MES": 5, "MNQ": 5, "YM": 5, "RTY": 5, "CL": 5, "GC": 5,
            },
            "consistencyRule": 0,
            "automationPolicy": "allowed",
        }

    def test_suggestion_omitted_when_absent(self) -> None:
        """Test that warnings without a suggestion render without the key."""
        assert "suggestion" not in _warning(Severity.INFO).to_dict()

        rendered = ValidationWarning(
            type=WarningType.POSITION_LIMIT,
            severity=Severity.ERROR,
            message="too big",
            suggestion="shrink",
        ).to_dict()
        assert rendered == {
            "type": "position_limit",
            "severity": "error",
            "message": "too big",
            "suggestion": "shrink",
        }
