"""System configuration.

One configuration for the whole system: logging settings plus the
calculation constants and score weights used by the performance engine.

Search Order (first match wins):
1. Explicit path passed to SystemConfig.load()
2. $FUNDMETRICS_CONFIG
3. ./system.yaml
4. Built-in defaults

Example system.yaml:

    logging:
      level: INFO
      format: console
    metrics:
      risk_free_rate_pct: 6.5
      rolling_window_days: 252
      period_days:
        1M: 21
        1Y: 252
    scoring:
      cagr_weight: 30
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from fundmetrics.libraries.performance.config import MetricsConfig, ScoringConfig, _default_period_days
from fundmetrics.system.log_system import LoggingConfig

CONFIG_ENV_VAR = "FUNDMETRICS_CONFIG"
DEFAULT_CONFIG_FILENAME = "system.yaml"


class MetricsSettings(BaseModel):
    """Engine constants as they appear in system.yaml."""

    risk_free_rate_pct: float = 6.5
    trading_days_per_year: int = 252
    calendar_days_per_year: int = 365
    benchmark_annual_return_pct: float = 12.0
    benchmark_annual_volatility_pct: float = 18.0
    rolling_window_days: int = 252
    expense_ratio_min_pct: float = 0.8
    expense_ratio_max_pct: float = 1.8
    period_days: dict[str, int] = Field(default_factory=_default_period_days)
    default_period_days: int = 252
    min_observations: int = 20
    min_period_observations: int = 10
    preferred_primary_period: str = "1Y"

    def to_metrics_config(self) -> MetricsConfig:
        """Convert to the immutable engine configuration."""
        return MetricsConfig(**self.model_dump())


class ScoringSettings(BaseModel):
    """Composite score weights as they appear in system.yaml."""

    cagr_weight: float = 30.0
    cagr_scale: float = 20.0
    sharpe_weight: float = 25.0
    sharpe_scale: float = 2.0
    volatility_weight: float = 20.0
    volatility_scale: float = 30.0
    alpha_weight: float = 15.0
    alpha_shift: float = 5.0
    alpha_scale: float = 10.0
    drawdown_weight: float = 10.0
    drawdown_scale: float = 40.0

    def to_scoring_config(self) -> ScoringConfig:
        """Convert to the immutable scoring configuration."""
        return ScoringConfig(**self.model_dump())


class SystemConfig(BaseModel):
    """Complete system configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "SystemConfig":
        """Load configuration from YAML, falling back to defaults.

        Args:
            path: Optional explicit config file path

        Returns:
            Parsed SystemConfig

        Raises:
            FileNotFoundError: If an explicit path does not exist
            ValueError: If the YAML cannot be parsed or fails validation
        """
        config_path = cls._resolve_path(path)
        if config_path is None:
            return cls()

        try:
            with open(config_path, "r") as f:
                raw: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML from {config_path}: {e}")

        if raw is None:
            return cls()
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(raw).__name__}")

        try:
            config = cls.model_validate(raw)
            # Surface dataclass validation errors at load time
            config.metrics.to_metrics_config()
            config.scoring.to_scoring_config()
        except ValueError as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}")

        return config

    @staticmethod
    def _resolve_path(path: str | Path | None) -> Path | None:
        """Find the config file to load, if any."""
        if path is not None:
            explicit = Path(path)
            if not explicit.exists():
                raise FileNotFoundError(f"Config file not found: {explicit}")
            return explicit

        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            env_file = Path(env_path)
            if not env_file.exists():
                raise FileNotFoundError(f"Config file from ${CONFIG_ENV_VAR} not found: {env_file}")
            return env_file

        local = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if local.exists():
            return local

        return None


_system_config: SystemConfig | None = None


def get_system_config() -> SystemConfig:
    """Get system config singleton (loaded on first access)."""
    global _system_config
    if _system_config is None:
        _system_config = SystemConfig.load()
    return _system_config


def reload_system_config(path: str | Path | None = None) -> SystemConfig:
    """Force reload of the system config singleton."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
