"""
Custom Exception Classes for the Proctor Harness

Provides a hierarchy of exceptions separating fatal training failures from
recoverable per-trial query failures.

Usage:
    from common.exceptions import TrainingError, QueryError

    try:
        proctor.train(detector)
    except TrainingError as e:
        logger.error(f"Training aborted: {e}")
"""

from typing import Any, Optional


class ProctorError(Exception):
    """
    Base exception class for the proctor harness.

    All custom exceptions inherit from this class, allowing
    broad exception catching when needed.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TrainingError(ProctorError):
    """
    Fatal error raised while acquiring a training scene or training the detector.

    Training is all-or-nothing: this error aborts the whole run.
    """

    def __init__(
        self,
        message: str,
        model_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if model_id is not None:
            details["model_id"] = model_id
        super().__init__(message, details)
        self.model_id = model_id


class QueryError(ProctorError):
    """
    Recoverable error raised by a detector while answering a single trial.

    The harness converts it into an abstained trial and moves on.
    """

    def __init__(
        self,
        message: str,
        model_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if model_id is not None:
            details["model_id"] = model_id
        super().__init__(message, details)
        self.model_id = model_id


class ConfigError(ProctorError):
    """Exception for invalid or unreadable experiment configuration."""

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if config_path:
            details["config_path"] = config_path
        super().__init__(message, details)
        self.config_path = config_path
