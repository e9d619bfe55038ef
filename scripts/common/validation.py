"""
Proctor - Validation Utilities

Structured error reporting for experiment setup: configuration checks and
model catalog checks run before any scanning starts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from colorama import Fore, Style

from .config_utils import ProctorConfig


class ErrorSeverity(Enum):
    """Severity levels for setup problems."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_SEVERITY_STYLE = {
    ErrorSeverity.INFO: (Fore.BLUE, "[INFO]"),
    ErrorSeverity.WARNING: (Fore.YELLOW, "[WARNING]"),
    ErrorSeverity.ERROR: (Fore.RED, "[ERROR]"),
    ErrorSeverity.CRITICAL: (Fore.RED + Style.BRIGHT, "[CRITICAL]"),
}


@dataclass
class PipelineError:
    """
    Structured problem found while validating an experiment.

    Attributes:
        message: Problem description
        severity: Severity level
        source: Check that reported the problem
        details: Additional context
    """

    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    source: str = ""
    details: Optional[str] = None

    def format(self, use_color: bool = True) -> str:
        """Format the problem as one line (plus details), optionally colored."""
        color, prefix = _SEVERITY_STYLE[self.severity]
        source_str = f" ({self.source})" if self.source else ""
        details_str = f"\n  Details: {self.details}" if self.details else ""

        if use_color:
            prefix = f"{color}{prefix}{Style.RESET_ALL}"
        return f"{prefix}{source_str}: {self.message}{details_str}"


@dataclass
class ValidationResult:
    """
    Outcome of a validation pass.

    Errors make the result invalid; warnings are reported but do not.
    """

    is_valid: bool = True
    errors: List[PipelineError] = field(default_factory=list)
    warnings: List[PipelineError] = field(default_factory=list)

    def add_error(self, message: str, source: str = "", details: Optional[str] = None) -> None:
        """Add an error and mark result as invalid."""
        self.is_valid = False
        self.errors.append(PipelineError(message, ErrorSeverity.ERROR, source, details))

    def add_warning(self, message: str, source: str = "", details: Optional[str] = None) -> None:
        """Add a warning (does not affect validity)."""
        self.warnings.append(PipelineError(message, ErrorSeverity.WARNING, source, details))

    def merge(self, other: "ValidationResult") -> None:
        """Merge another ValidationResult into this one."""
        self.is_valid = self.is_valid and other.is_valid
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def format_all(self, use_color: bool = True) -> str:
        """Format all errors followed by all warnings."""
        return "\n".join(p.format(use_color) for p in self.errors + self.warnings)

    def print_all(self, use_color: bool = True) -> None:
        """Print all errors and warnings to stdout."""
        formatted = self.format_all(use_color)
        if formatted:
            print(formatted)


def validate_proctor_config(config: ProctorConfig) -> ValidationResult:
    """
    Validate an experiment configuration.

    Checks:
    - Positive model count, non-negative trial count
    - Viewpoint bounds are ordered
    - Grid counts are positive
    - Every model gets tested at least once (warning only)

    Args:
        config: Configuration to check

    Returns:
        ValidationResult with any errors or warnings
    """
    result = ValidationResult()
    source = "validate_proctor_config"

    if config.num_models < 1:
        result.add_error(f"num_models must be positive, got {config.num_models}", source=source)
    if config.num_trials < 0:
        result.add_error(f"num_trials must not be negative, got {config.num_trials}", source=source)

    if config.theta_min > config.theta_max:
        result.add_error(
            "theta_min is greater than theta_max",
            source=source,
            details=f"{config.theta_min} > {config.theta_max}",
        )
    if config.phi_min > config.phi_max:
        result.add_error(
            "phi_min is greater than phi_max",
            source=source,
            details=f"{config.phi_min} > {config.phi_max}",
        )

    for name in ("theta_count", "phi_count"):
        if getattr(config, name) < 1:
            result.add_error(f"{name} must be at least 1", source=source)

    if result.is_valid and config.num_trials == 0:
        result.add_warning(
            "num_trials is 0",
            source=source,
            details="Statistics will be empty",
        )
    elif result.is_valid and config.num_trials < config.num_models:
        result.add_warning(
            f"Only {config.num_trials} trials for {config.num_models} models",
            source=source,
            details="Some models will never be tested",
        )

    return result


def validate_model_catalog(model_ids: Sequence[str], num_models: int) -> ValidationResult:
    """
    Validate a model catalog returned by a model source.

    Args:
        model_ids: Ordered model ids
        num_models: Number of models the experiment needs

    Returns:
        ValidationResult
    """
    result = ValidationResult()
    source = "validate_model_catalog"

    if len(model_ids) == 0:
        result.add_error("Model source returned an empty catalog", source=source)
        return result

    if len(model_ids) < num_models:
        result.add_error(
            f"Model source offers {len(model_ids)} models, {num_models} required",
            source=source,
        )

    seen = set()
    duplicates = []
    for model_id in model_ids[:num_models]:
        if model_id in seen:
            duplicates.append(model_id)
        seen.add(model_id)
    if duplicates:
        result.add_error(
            "Duplicate model ids in catalog",
            source=source,
            details=", ".join(sorted(set(duplicates))),
        )

    if len(model_ids) > num_models:
        result.add_warning(
            f"Catalog truncated from {len(model_ids)} to {num_models} models",
            source=source,
        )

    return result
