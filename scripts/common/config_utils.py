"""
Proctor - Configuration Utilities

Experiment configuration as dataclasses, with YAML loading.
"""

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Optional

import yaml

from .constants import (
    DEFAULT_DESCRIPTOR_BINS,
    DEFAULT_MAX_REGISTRATIONS,
    DEFAULT_NUM_MODELS,
    DEFAULT_NUM_POINTS,
    DEFAULT_NUM_TRIALS,
    DEFAULT_OCCLUSION_RATIO,
    DEFAULT_PHI_COUNT,
    DEFAULT_PHI_MAX,
    DEFAULT_PHI_MIN,
    DEFAULT_PHI_START,
    DEFAULT_PHI_STEP,
    DEFAULT_SCAN_NOISE,
    DEFAULT_SEED,
    DEFAULT_THETA_COUNT,
    DEFAULT_THETA_MAX,
    DEFAULT_THETA_MIN,
    DEFAULT_THETA_START,
    DEFAULT_THETA_STEP,
)
from .exceptions import ConfigError


# =============================================================================
# Experiment Configuration
# =============================================================================


def _coerce(value, target):
    """Convert a loaded value (possibly a YAML string) to int, float or bool."""
    if target is bool:
        if isinstance(value, str):
            if value.strip().lower() in ("true", "yes", "1"):
                return True
            if value.strip().lower() in ("false", "no", "0"):
                return False
            raise ValueError(value)
        return bool(value)
    if isinstance(value, bool):
        raise TypeError("boolean given for a numeric field")
    if target is int:
        number = float(value)
        if not number.is_integer():
            raise ValueError(value)
        return int(number)
    return float(value)


@dataclass
class ProctorConfig:
    """
    Configuration for one proctor experiment run.

    The viewpoint geometry is not read by the statistics; it is handed to
    model sources that scan from sampled viewpoints.

    Attributes:
        num_models: Number of catalog models to train on and test against
        num_trials: Number of test trials
        seed: Seed for the process-global random generators
        count_self_tie: Count the true model's own slot as a tie when ranking
        theta_*/phi_*: Viewpoint scanning grid and random-viewpoint bounds
    """

    num_models: int = DEFAULT_NUM_MODELS
    num_trials: int = DEFAULT_NUM_TRIALS
    seed: int = DEFAULT_SEED
    count_self_tie: bool = False

    # Scanning grid
    theta_start: float = DEFAULT_THETA_START
    theta_step: float = DEFAULT_THETA_STEP
    theta_count: int = DEFAULT_THETA_COUNT
    phi_start: float = DEFAULT_PHI_START
    phi_step: float = DEFAULT_PHI_STEP
    phi_count: int = DEFAULT_PHI_COUNT

    # Random viewpoint bounds
    theta_min: float = DEFAULT_THETA_MIN
    theta_max: float = DEFAULT_THETA_MAX
    phi_min: float = DEFAULT_PHI_MIN
    phi_max: float = DEFAULT_PHI_MAX

    def __post_init__(self):
        """Coerce field values to their declared types."""
        for f in fields(self):
            value = getattr(self, f.name)
            try:
                setattr(self, f.name, _coerce(value, f.type))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid {f.name}: {value!r}") from e

    def to_dict(self) -> Dict:
        """Convert to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "ProctorConfig":
        """Build a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def quick(cls) -> "ProctorConfig":
        """Get a small configuration for smoke runs."""
        return cls(num_models=3, num_trials=6)


@dataclass
class SyntheticConfig:
    """
    Configuration for the synthetic model source and detector.

    Attributes:
        num_points: Points per generated model cloud
        noise: Gaussian noise sigma added to each scan
        occlusion_ratio: Fraction of points removed from each scan
        descriptor_bins: Histogram bins of the detector's shape descriptor
        max_registrations: Candidates the detector registers per query
    """

    num_points: int = DEFAULT_NUM_POINTS
    noise: float = DEFAULT_SCAN_NOISE
    occlusion_ratio: float = DEFAULT_OCCLUSION_RATIO
    descriptor_bins: int = DEFAULT_DESCRIPTOR_BINS
    max_registrations: int = DEFAULT_MAX_REGISTRATIONS

    def __post_init__(self):
        """Validate configuration."""
        if not 0.0 <= self.occlusion_ratio < 1.0:
            raise ValueError(f"Invalid occlusion_ratio: {self.occlusion_ratio}")
        if self.num_points < 1:
            raise ValueError("num_points must be at least 1")
        if self.max_registrations < 1:
            raise ValueError("max_registrations must be at least 1")


# =============================================================================
# Configuration Loading
# =============================================================================


def load_proctor_config(
    config_path: str,
    overrides: Optional[Dict] = None,
) -> ProctorConfig:
    """
    Load experiment configuration from a YAML file.

    The file may hold the settings at top level or under a "proctor" key.

    Args:
        config_path: Path to the YAML file
        overrides: Values that take precedence over the file (None entries skipped)

    Returns:
        ProctorConfig instance

    Raises:
        ConfigError: If the file is missing or unparseable
    """
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {config_path}", config_path=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML: {e}", config_path=str(path)) from e

    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", config_path=str(path))

    data = dict(data.get("proctor", data))
    for key, value in (overrides or {}).items():
        if value is not None:
            data[key] = value

    try:
        return ProctorConfig.from_dict(data)
    except ValueError as e:
        raise ConfigError(str(e), config_path=str(path)) from e
