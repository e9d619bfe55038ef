"""
Proctor - Common Constants

Shared constants used by the proctor harness, the synthetic collaborators,
and the command-line entry point.
"""

import math

# =============================================================================
# Experiment Defaults
# =============================================================================
# Catalog and trial counts
DEFAULT_NUM_MODELS: int = 10
DEFAULT_NUM_TRIALS: int = 20

# Seed handed to random.seed / numpy.random.seed at the start of testing
DEFAULT_SEED: int = 0

# Model ids produced by the synthetic model source
DEFAULT_MODEL_ID_PREFIX: str = "model_"


# =============================================================================
# Viewpoint Sampling Geometry (radians)
# =============================================================================
# Scanning grid
DEFAULT_THETA_START: float = math.pi / 12
DEFAULT_THETA_STEP: float = 0.0
DEFAULT_THETA_COUNT: int = 1
DEFAULT_PHI_START: float = 0.0
DEFAULT_PHI_STEP: float = math.pi / 6
DEFAULT_PHI_COUNT: int = 12

# Bounds for randomly drawn test viewpoints
DEFAULT_THETA_MIN: float = 0.0
DEFAULT_THETA_MAX: float = math.pi / 6
DEFAULT_PHI_MIN: float = 0.0
DEFAULT_PHI_MAX: float = math.pi * 2


# =============================================================================
# Synthetic Collaborator Defaults
# =============================================================================
DEFAULT_NUM_POINTS: int = 500
DEFAULT_SCAN_NOISE: float = 0.01  # Gaussian sigma, model units
DEFAULT_OCCLUSION_RATIO: float = 0.3  # Fraction of points hidden per scan
DEFAULT_DESCRIPTOR_BINS: int = 32
DEFAULT_MAX_REGISTRATIONS: int = 3


# =============================================================================
# Report Labels
# =============================================================================
# Section headers printed by the harness
SECTION_PRECISION_RECALL: str = "[precision-recall]"
SECTION_CLASSIFIER_STATS: str = "[classifier stats]"
SECTION_TIMING: str = "[timing]"
SECTION_DETECTOR_TIMING: str = "[detector timing]"
SECTION_OVERVIEW: str = "[overview]"
SECTION_CONFUSION_MATRIX: str = "[confusion matrix]"

# Environment variable read by the logger
LOG_LEVEL_ENV_VAR: str = "PROCTOR_LOG_LEVEL"
