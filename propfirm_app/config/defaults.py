"""Default configuration parameters for the firm rules engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RiskThresholdParams:
    """Per-trade risk bands, as fractions of the tier's daily loss limit."""
    error_fraction: float = 0.5                      # Above this: error
    warning_fraction: float = 0.33                   # Above this: warning
    recommended_low_fraction: float = 0.25           # Lower bound quoted in advice


@dataclass(frozen=True)
class PositionLimitParams:
    """Contract-limit headroom parameters."""
    scaling_fraction: float = 0.8                    # Suggested share of the limit


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    risk: RiskThresholdParams
    position: PositionLimitParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        risk=RiskThresholdParams(),
        position=PositionLimitParams(),
        logging=LoggingParams(),
    )
