"""
Runner Configuration

Settings that control how an analysis is executed (not what it does):
worker fan-out, data provider error policy and logging.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Union
import logging
import os

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

WORKERS_ENV_VAR = "VARIANT_TRIAGE_WORKERS"

DATA_PROVIDER_POLICIES = ("fail", "contain")


def setup_logging(verbose: bool = True) -> None:
    """Configure root logging in the format used across the package."""
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def default_workers() -> int:
    """
    Return the worker count from VARIANT_TRIAGE_WORKERS, or 1.

    Invalid or non-positive values fall back to sequential execution.
    """
    env_value = os.getenv(WORKERS_ENV_VAR)
    if env_value is None:
        return 1
    try:
        return max(1, int(env_value))
    except ValueError:
        logger.warning(f"Ignoring invalid {WORKERS_ENV_VAR}={env_value!r}")
        return 1


@dataclass
class RunnerConfig:
    """Configuration for an AnalysisRunner."""

    # Worker threads per step (1 = sequential), from VARIANT_TRIAGE_WORKERS by default
    max_workers: int = field(default_factory=default_workers)

    # "fail" aborts the run on a DataProviderError, "contain" records a FAIL
    data_provider_errors: str = "fail"

    # Logging
    configure_logging: bool = False
    verbose: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ConfigurationError(
                f"max_workers must be a positive integer, got {self.max_workers!r}",
                option="max_workers",
            )
        if self.data_provider_errors not in DATA_PROVIDER_POLICIES:
            raise ConfigurationError(
                f"data_provider_errors must be one of {DATA_PROVIDER_POLICIES}, "
                f"got {self.data_provider_errors!r}",
                option="data_provider_errors",
            )

    @property
    def contain_data_provider_errors(self) -> bool:
        return self.data_provider_errors == "contain"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RunnerConfig":
        """
        Create from a dictionary, ignoring unknown keys.

        The VARIANT_TRIAGE_WORKERS environment variable is used when
        max_workers is not given.
        """
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in (data or {}).items() if k in known}
        ignored = sorted(set(data or {}) - known)
        if ignored:
            logger.info(f"Ignoring unknown runner settings: {ignored}")
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "RunnerConfig":
        """
        Load runner settings from a YAML file.

        The settings may sit at the top level or under a "runner" key.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Runner config file not found: {path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Runner config must be a mapping: {path}")
        if "runner" in data:
            data = data["runner"] or {}
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "max_workers": self.max_workers,
            "data_provider_errors": self.data_provider_errors,
            "configure_logging": self.configure_logging,
            "verbose": self.verbose,
        }
