"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    DefaultConfig,
    LoggingParams,
    PositionLimitParams,
    RiskThresholdParams,
    get_default_config,
)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings(self) -> dict[str, Any]:
        """Load global setting overrides from settings.yaml."""
        return self._load_yaml(self.config_dir / "settings.yaml")

    def load_firm_config(self, firm_slug: str) -> dict[str, Any]:
        """Load firm-specific configuration overrides."""
        firms_config = self._load_yaml(self.config_dir / "firms.yaml")
        return firms_config.get("firms", {}).get(firm_slug, {})  # type: ignore[no-any-return]

    def merge_config(
        self,
        firm_slug: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. Firm-specific overrides from firms.yaml
        3. Global settings.yaml, then built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)
        config = self._deep_merge(config, self.load_settings())

        if firm_slug:
            config = self._deep_merge(config, self.load_firm_config(firm_slug))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, merged: dict[str, Any]) -> DefaultConfig:
        """Rebuild typed parameters from a merged configuration dict."""
        return DefaultConfig(
            risk=RiskThresholdParams(**merged.get("risk", {})),
            position=PositionLimitParams(**merged.get("position", {})),
            logging=LoggingParams(**merged.get("logging", {})),
        )

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}

        with open(path) as f:
            loaded = yaml.safe_load(f)

        return loaded or {}

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
