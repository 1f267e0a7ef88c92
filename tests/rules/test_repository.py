"""Tests for the firm rule repository and firm detection."""

import pytest
import yaml

from propfirm_app.data.models import (
    AutomationPolicy,
    DrawdownType,
    FirmRuleBundle,
    Instrument,
    NotFound,
    NotFoundKind,
)
from propfirm_app.errors import RuleDataError
from propfirm_app.rules.repository import (
    DEFAULT_RULES_DIR,
    FirmRuleRepository,
    detect_firm_from_message,
    is_supported_firm,
    list_supported_firms,
    normalize_firm_name,
)


class TestFirmNames:
    """Test name normalization and the supported-firm allow-list."""

    def test_supported_firms_order(self) -> None:
        """Test the fixed enumeration order."""
        assert list_supported_firms() == (
            "topstep", "myfundedfutures", "tradeify", "alpha-futures", "ftmo", "fundednext",
        )

    @pytest.mark.parametrize("raw, expected", [
        ("Topstep", "topstep"),
        ("Alpha Futures", "alpha-futures"),
        ("alpha   futures", "alpha-futures"),
        ("FTMO", "ftmo"),
    ])
    def test_normalize_firm_name(self, raw, expected) -> None:
        """Test lowercasing and whitespace collapsing."""
        assert normalize_firm_name(raw) == expected

    def test_is_supported_firm(self) -> None:
        """Test membership after normalization."""
        assert is_supported_firm("Alpha Futures")
        assert not is_supported_firm("Apex Trader Funding")


class TestRepositoryLoad:
    """Test loading bundles from the shipped data."""

    @pytest.mark.parametrize("slug", list_supported_firms())
    def test_every_supported_firm_loads(self, repository, slug) -> None:
        """Test that each shipped data file builds a consistent bundle."""
        bundle = repository.load(slug)

        assert isinstance(bundle, FirmRuleBundle)
        assert bundle.slug == slug
        assert set(bundle.tiers) <= set(bundle.supported_account_sizes)
        for tier in bundle.tiers.values():
            assert set(tier.max_contracts) == set(Instrument)

    def test_load_topstep(self, repository) -> None:
        """Test typed values on a loaded bundle."""
        bundle = repository.load("Topstep")

        assert bundle.firm_name == "Topstep"
        assert bundle.automation_policy is AutomationPolicy.ALLOWED
        assert bundle.supported_account_sizes == (50000, 100000, 150000)
        tier = bundle.tiers[50000]
        assert tier.daily_loss_limit == 1000
        assert tier.drawdown_type is DrawdownType.EOD_TRAILING
        assert tier.max_contracts[Instrument.ES] == 5

    def test_load_display_name_with_space(self, repository) -> None:
        """Test that a display name with spaces resolves to its slug."""
        bundle = repository.load("Alpha Futures")
        assert bundle.slug == "alpha-futures"

    @pytest.mark.parametrize("name", ["Apex Trader Funding", "", "topstep!", "my funded futures"])
    def test_unsupported_firm_is_not_found(self, repository, name) -> None:
        """Test that unsupported names return NotFound instead of raising."""
        result = repository.load(name)

        assert isinstance(result, NotFound)
        assert result.kind is NotFoundKind.FIRM
        assert result.key == name

    def test_bundles_are_cached(self, repository) -> None:
        """Test that a firm is read once and then shared."""
        first = repository.load("ftmo")
        second = repository.load("FTMO")

        assert first is second
        assert repository.loaded_firms() == ["ftmo"]

    def test_separate_repositories_build_equal_bundles(self) -> None:
        """Test that independent loads of the same firm are substitutable."""
        first = FirmRuleRepository().load("tradeify")
        second = FirmRuleRepository().load("tradeify")

        assert first is not second
        assert first == second

    def test_bundle_is_read_only(self, repository) -> None:
        """Test that bundle fields and mappings cannot be modified."""
        bundle = repository.load("topstep")

        with pytest.raises(AttributeError):
            bundle.firm_name = "Other"
        with pytest.raises(TypeError):
            bundle.tiers[25000] = bundle.tiers[50000]
        with pytest.raises(TypeError):
            bundle.tiers[50000].max_contracts[Instrument.ES] = 99


class TestRepositoryDataErrors:
    """Test handling of corrupted rule data."""

    def test_missing_data_file(self, tmp_path) -> None:
        """Test that a supported firm without a data file raises RuleDataError."""
        repository = FirmRuleRepository(rules_dir=tmp_path)

        with pytest.raises(RuleDataError) as exc_info:
            repository.load("topstep")

        assert exc_info.value.firm_slug == "topstep"
        assert exc_info.value.recoverable is False

    def test_invalid_data_file(self, tmp_path) -> None:
        """Test that structural errors are collected on the exception."""
        document = yaml.safe_load((DEFAULT_RULES_DIR / "ftmo.yaml").read_text())
        document["rules"][50000]["drawdown_type"] = "weekly"
        (tmp_path / "ftmo.yaml").write_text(yaml.safe_dump(document))

        with pytest.raises(RuleDataError) as exc_info:
            FirmRuleRepository(rules_dir=tmp_path).load("ftmo")

        assert any("drawdown_type" in err for err in exc_info.value.errors)

    def test_slug_mismatch(self, tmp_path) -> None:
        """Test that a file must declare the slug it is stored under."""
        document = yaml.safe_load((DEFAULT_RULES_DIR / "ftmo.yaml").read_text())
        (tmp_path / "fundednext.yaml").write_text(yaml.safe_dump(document))

        with pytest.raises(RuleDataError):
            FirmRuleRepository(rules_dir=tmp_path).load("fundednext")


class TestDetectFirmFromMessage:
    """Test free-text firm detection."""

    @pytest.mark.parametrize("message, expected", [
        ("I trade with TopStep", "topstep"),
        ("my top step combine", "topstep"),
        ("Passed my MFF eval yesterday", "myfundedfutures"),
        ("using My Funded Futures", "myfundedfutures"),
        ("Tradeify growth account", "tradeify"),
        ("alpha-futures 100k", "alpha-futures"),
        ("Alpha Futures qualified", "alpha-futures"),
        ("FTMO challenge", "ftmo"),
        ("Funded Next futures", "fundednext"),
    ])
    def test_detects_firm(self, message, expected) -> None:
        """Test each firm's patterns."""
        assert detect_firm_from_message(message) == expected

    def test_no_firm(self) -> None:
        """Test that unrelated text yields None."""
        assert detect_firm_from_message("not a known firm") is None

    def test_enumeration_order_breaks_ties(self) -> None:
        """Test that the earliest firm wins when several match."""
        assert detect_firm_from_message("ftmo or topstep?") == "topstep"
        assert detect_firm_from_message("fundednext vs tradeify") == "tradeify"
