"""
Proctor - Experiment Orchestrator

Trains a detector on every catalog model, runs a fixed number of test
trials against it, and reports:
- Precision-recall over registration distance
- Rank of the true model among classifier votes
- Time spent per harness phase
- Overall accuracy and confusion matrix
"""

import random
from typing import Dict, List, Optional, Tuple

import numpy as np

from common.config_utils import ProctorConfig
from common.constants import (
    SECTION_CLASSIFIER_STATS,
    SECTION_CONFUSION_MATRIX,
    SECTION_DETECTOR_TIMING,
    SECTION_OVERVIEW,
    SECTION_PRECISION_RECALL,
    SECTION_TIMING,
)
from common.exceptions import ConfigError, ProctorError, TrainingError
from common.logger import get_logger
from common.validation import validate_model_catalog, validate_proctor_config

from proctor.confusion_matrix import ConfusionMatrix
from proctor.interfaces import Detector, ModelSource, QueryResult, Scene
from proctor.statistics import (
    ClassifierStats,
    PrecisionRecallPoint,
    compute_classifier_stats,
    compute_precision_recall,
)
from proctor.timer import Phase, TrialTimer

logger = get_logger("proctor.harness")


def query_detector(
    detector: Detector,
    scene: Scene,
    classifier_row: np.ndarray,
    registration_row: np.ndarray,
) -> QueryResult:
    """
    Ask the detector for a guess and normalize the outcome.

    A raised exception becomes a failed result carrying its message.
    """
    try:
        outcome = detector.query(scene, classifier_row, registration_row)
    except Exception as e:
        return QueryResult.failure(str(e) or type(e).__name__)

    if isinstance(outcome, QueryResult):
        return outcome
    if outcome is None:
        return QueryResult.failure("detector returned no guess")
    return QueryResult.success(str(outcome))


class Proctor:
    """
    Runs one train/test experiment against a detector.

    Owns the model catalog, the per-trial result tables and the confusion
    matrix. The model source and detector are supplied by the caller.

    Example:
        >>> proctor = Proctor(source, ProctorConfig(num_models=5, num_trials=20))
        >>> proctor.train(detector)
        >>> proctor.test(detector, seed=0)
        >>> proctor.print_results(detector)
    """

    def __init__(self, source: ModelSource, config: Optional[ProctorConfig] = None):
        """
        Initialize the harness.

        Args:
            source: Model source providing the catalog and scans
            config: Experiment configuration

        Raises:
            ConfigError: If the configuration is invalid
        """
        self.config = config or ProctorConfig()
        validation = validate_proctor_config(self.config)
        if not validation.is_valid:
            raise ConfigError(
                "Invalid proctor configuration",
                details={"errors": [e.message for e in validation.errors]},
            )

        self.source = source
        self.timer = TrialTimer()

        self.model_ids: Tuple[str, ...] = ()
        self.truth_indices: List[int] = []
        self.classifier = np.zeros((0, self.config.num_models))
        self.registration = np.zeros((0, self.config.num_models))
        self.guesses: Dict[str, Dict[str, int]] = {}
        self.confusion_matrix = ConfusionMatrix()

    @property
    def num_models(self) -> int:
        return self.config.num_models

    @property
    def num_trials(self) -> int:
        return self.config.num_trials

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, detector: Detector) -> None:
        """
        Train the detector on one scan of every catalog model, in order.

        Any failure aborts training.

        Raises:
            TrainingError: If the catalog is unusable, a scan fails, or the
                detector fails to train
        """
        model_ids = list(self.source.get_model_ids())
        catalog_check = validate_model_catalog(model_ids, self.num_models)
        if not catalog_check.is_valid:
            raise TrainingError(
                "Unusable model catalog",
                details={"errors": [e.message for e in catalog_check.errors]},
            )
        for warning in catalog_check.warnings:
            logger.warning(warning.message)
        self.model_ids = tuple(model_ids[: self.num_models])

        logger.info("Proctor beginning training")

        for mi, model_id in enumerate(self.model_ids):
            logger.info(f"Begin scanning model {mi} ({model_id})")
            try:
                with self.timer.measure(Phase.OBTAIN_CLOUD_TRAINING):
                    cloud = self.source.get_training_model(model_id)
            except Exception as e:
                raise TrainingError(f"Failed to scan model {model_id}: {e}", model_id=model_id) from e
            logger.info(f"Finished scanning model {mi} ({model_id})")

            logger.info(f"Begin training model {mi} ({model_id})")
            try:
                with self.timer.measure(Phase.DETECTOR_TRAIN):
                    detector.train(Scene(model_id, cloud))
            except Exception as e:
                raise TrainingError(f"Detector failed to train on {model_id}: {e}", model_id=model_id) from e
            logger.info(f"Finished training model {mi} ({model_id})")

        logger.info("Proctor finished training")

    # ------------------------------------------------------------------
    # Testing
    # ------------------------------------------------------------------

    def test(self, detector: Detector, seed: Optional[int] = None) -> ConfusionMatrix:
        """
        Run every test trial against the trained detector.

        Ground truth cycles through the catalog in order. A failed query
        leaves the trial out of the confusion matrix and zeroes its rows.

        Args:
            detector: Trained detector
            seed: Seed for the process-global generators (config seed if None)

        Returns:
            The confusion matrix of successful trials

        Raises:
            ProctorError: If called before train()
        """
        if not self.model_ids:
            raise ProctorError("Proctor.test called before train")

        seed = self.config.seed if seed is None else seed
        random.seed(seed)
        np.random.seed(seed)

        self.classifier = np.zeros((self.num_trials, self.num_models))
        self.registration = np.zeros((self.num_trials, self.num_models))
        self.truth_indices = []
        self.guesses = {}
        self.confusion_matrix = ConfusionMatrix()

        for ni in range(self.num_trials):
            logger.info(f"[test {ni}]")

            mi = ni % len(self.model_ids)
            truth_id = self.model_ids[mi]
            self.truth_indices.append(mi)
            guesses_for_id = self.guesses.setdefault(truth_id, {})

            with self.timer.measure(Phase.OBTAIN_CLOUD_TESTING):
                cloud = self.source.get_test_model(truth_id)
            logger.info(f"scanned model {mi} ({truth_id})")

            with self.timer.measure(Phase.DETECTOR_TEST):
                result = query_detector(
                    detector,
                    Scene(truth_id, cloud),
                    self.classifier[ni],
                    self.registration[ni],
                )
                if result.ok:
                    guesses_for_id[result.guess_id] = guesses_for_id.get(result.guess_id, 0) + 1
                    self.confusion_matrix.increment(truth_id, result.guess_id)
                    logger.info(f"detector guessed {result.guess_id}")
                else:
                    logger.warning("Detector exception")
                    logger.warning(result.reason)
                    self.classifier[ni] = 0
                    self.registration[ni] = 0

        self.print_confusion_matrix(self.confusion_matrix)
        return self.confusion_matrix

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def precision_recall(self) -> List[PrecisionRecallPoint]:
        return compute_precision_recall(self.registration, self.truth_indices)

    def classifier_stats(self) -> ClassifierStats:
        return compute_classifier_stats(
            self.classifier,
            self.truth_indices,
            count_self_tie=self.config.count_self_tie,
        )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def format_precision_recall(self) -> str:
        return "\n".join(point.format() for point in self.precision_recall())

    def format_overview(self, matrix: Optional[ConfusionMatrix] = None) -> str:
        matrix = matrix or self.confusion_matrix
        return (
            f"{matrix.trace()} of {matrix.total()} correct "
            f"({matrix.accuracy() * 100:.2f}%)"
        )

    def print_precision_recall(self) -> None:
        for point in self.precision_recall():
            print(point.format())

    def print_classifier_stats(self) -> None:
        print(self.classifier_stats().format())

    def print_timer(self) -> None:
        print(self.timer.format_report())

    def print_results(self, detector: Detector) -> None:
        """Print the precision-recall, classifier and timing blocks."""
        print(SECTION_PRECISION_RECALL)
        self.print_precision_recall()

        print(SECTION_CLASSIFIER_STATS)
        self.print_classifier_stats()

        print(SECTION_TIMING)
        self.print_timer()
        print(SECTION_DETECTOR_TIMING)
        detector.print_timer()

    def print_confusion_matrix(self, matrix: ConfusionMatrix) -> None:
        print(SECTION_OVERVIEW)
        print(self.format_overview(matrix))
        print()

        print(SECTION_CONFUSION_MATRIX)
        matrix.print_matrix()
        print()

    def summary(self) -> str:
        """All harness report blocks as one string (detector timing excluded)."""
        lines = [
            SECTION_PRECISION_RECALL,
            self.format_precision_recall(),
            SECTION_CLASSIFIER_STATS,
            self.classifier_stats().format(),
            SECTION_TIMING,
            self.timer.format_report(),
            SECTION_OVERVIEW,
            self.format_overview(),
            SECTION_CONFUSION_MATRIX,
            self.confusion_matrix.format_matrix(),
        ]
        return "\n".join(line for line in lines if line)

    def to_dict(self) -> Dict:
        """Statistics of the last run as plain data."""
        return {
            "model_ids": list(self.model_ids),
            "num_trials": self.num_trials,
            "correct": self.confusion_matrix.trace(),
            "total": self.confusion_matrix.total(),
            "confusion_matrix": self.confusion_matrix.to_dict(),
            "precision_recall": [
                {"precision": p.precision, "recall": p.recall, "distance": p.distance}
                for p in self.precision_recall()
            ],
            "classifier_stats": self.classifier_stats().to_dict(),
            "timing": self.timer.as_dict(),
        }
