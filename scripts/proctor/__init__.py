"""
Proctor - 3-D Object Recognition Evaluation Harness

Trains a pluggable detector over a model catalog, runs reproducible test
trials, and reports precision-recall, classifier rank, timing and
confusion statistics.
"""

from .sampling import random_subset
from .timer import Phase, TrialTimer
from .confusion_matrix import ConfusionMatrix
from .interfaces import Detector, ModelSource, QueryResult, Scene
from .statistics import (
    ClassifierStats,
    Detection,
    PrecisionRecallPoint,
    compute_classifier_stats,
    compute_precision_recall,
)
from .proctor import Proctor, query_detector

__all__ = [
    "random_subset",
    "Phase",
    "TrialTimer",
    "ConfusionMatrix",
    "Detector",
    "ModelSource",
    "QueryResult",
    "Scene",
    "ClassifierStats",
    "Detection",
    "PrecisionRecallPoint",
    "compute_classifier_stats",
    "compute_precision_recall",
    "Proctor",
    "query_detector",
]
