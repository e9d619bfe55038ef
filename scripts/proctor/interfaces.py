"""
Proctor - Collaborator Contracts

The harness drives two collaborators it does not own: a model source that
produces point clouds and a detector that learns and recognizes them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

import numpy as np


@dataclass
class Scene:
    """
    A point cloud tagged with the id of the model it was scanned from.

    Attributes:
        model_id: Catalog id of the scanned model
        cloud: Point data; the harness never inspects it
    """

    model_id: str
    cloud: Any


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of one detector query.

    Exactly one of guess_id / reason is set.
    """

    guess_id: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.guess_id is not None

    @classmethod
    def success(cls, guess_id: str) -> "QueryResult":
        return cls(guess_id=guess_id)

    @classmethod
    def failure(cls, reason: str) -> "QueryResult":
        return cls(reason=reason or "unknown detector failure")


class ModelSource(ABC):
    """
    Provider of the model catalog and of scans of each model.

    Repeated calls for the same id may return different scans.
    """

    @abstractmethod
    def get_model_ids(self) -> Sequence[str]:
        """Return the ordered, non-empty model catalog."""
        pass

    @abstractmethod
    def get_training_model(self, model_id: str) -> Any:
        """Return a training scan of a model."""
        pass

    @abstractmethod
    def get_test_model(self, model_id: str) -> Any:
        """Return a test scan of a model."""
        pass


class Detector(ABC):
    """
    Recognizer under evaluation.

    query() writes one score per catalog model into classifier_row and one
    registration distance per catalog model into registration_row (0 means
    registration was not attempted), then reports its guess.
    """

    @abstractmethod
    def train(self, scene: Scene) -> None:
        """Learn one catalog model. Raising aborts the experiment."""
        pass

    @abstractmethod
    def query(
        self,
        scene: Scene,
        classifier_row: np.ndarray,
        registration_row: np.ndarray,
    ) -> Union[QueryResult, str]:
        """
        Recognize a scene.

        Returns:
            A QueryResult, or a bare guessed model id. Raising is treated
            as a failed trial.
        """
        pass

    def print_timer(self) -> None:
        """Print the detector's own timing block."""
        pass
