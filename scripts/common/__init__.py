"""
Proctor - Common Utilities Module

Shared constants, configuration, validation, exceptions, and logging
used by the proctor harness and its command-line entry point.
"""

from .constants import (
    # Experiment defaults
    DEFAULT_NUM_MODELS,
    DEFAULT_NUM_TRIALS,
    DEFAULT_SEED,
    # Report labels
    SECTION_PRECISION_RECALL,
    SECTION_CLASSIFIER_STATS,
    SECTION_TIMING,
    SECTION_DETECTOR_TIMING,
    SECTION_OVERVIEW,
    SECTION_CONFUSION_MATRIX,
)

from .config_utils import (
    ProctorConfig,
    SyntheticConfig,
    load_proctor_config,
)

from .exceptions import (
    ProctorError,
    TrainingError,
    QueryError,
    ConfigError,
)

from .validation import (
    ErrorSeverity,
    PipelineError,
    ValidationResult,
    validate_proctor_config,
    validate_model_catalog,
)

from .logger import (
    ColoredFormatter,
    setup_logger,
    get_logger,
)

__all__ = [
    # Constants
    "DEFAULT_NUM_MODELS",
    "DEFAULT_NUM_TRIALS",
    "DEFAULT_SEED",
    "SECTION_PRECISION_RECALL",
    "SECTION_CLASSIFIER_STATS",
    "SECTION_TIMING",
    "SECTION_DETECTOR_TIMING",
    "SECTION_OVERVIEW",
    "SECTION_CONFUSION_MATRIX",
    # Config utilities
    "ProctorConfig",
    "SyntheticConfig",
    "load_proctor_config",
    # Exceptions
    "ProctorError",
    "TrainingError",
    "QueryError",
    "ConfigError",
    # Validation
    "ErrorSeverity",
    "PipelineError",
    "ValidationResult",
    "validate_proctor_config",
    "validate_model_catalog",
    # Logging
    "ColoredFormatter",
    "setup_logger",
    "get_logger",
]
