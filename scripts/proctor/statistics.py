"""
Proctor - Result Statistics

Derives the precision-recall curve and the classifier rank summary from the
per-trial result tables.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import numpy as np


@dataclass(frozen=True)
class Detection:
    """
    One attempted registration.

    Attributes:
        trial: Trial index
        model: Candidate model index
        distance: Registration distance (never 0)
    """

    trial: int
    model: int
    distance: float


@dataclass(frozen=True)
class PrecisionRecallPoint:
    """Curve point emitted at a correct detection."""

    precision: float
    recall: float
    distance: float

    def format(self) -> str:
        return f"{self.precision:.6f} {self.recall:.6f} {self.distance:g}"


@dataclass
class ClassifierStats:
    """
    Rank of the true model among the classifier votes.

    Attributes:
        mean_rank: Average midpoint-of-ties rank (1.0 is perfect)
        area: Area under the cumulative correct-by-rank histogram
        max_area: num_models * num_trials, the area of a perfect run
        ranks: Strict rank of the true model in each trial
    """

    mean_rank: float
    area: int
    max_area: int
    ranks: List[int] = field(default_factory=list)

    def format(self) -> str:
        return (
            f"average vote rank of correct model:                    {self.mean_rank:0.2f}\n"
            f"area under cumulative histogram of correct model rank: {self.area:d}"
        )

    def to_dict(self) -> Dict:
        return {
            "mean_rank": self.mean_rank,
            "area": self.area,
            "max_area": self.max_area,
            "ranks": list(self.ranks),
        }


def collect_detections(registration: np.ndarray) -> List[Detection]:
    """
    List every attempted registration, trial-major.

    A zero distance means the candidate was not registered and is skipped.
    """
    detections = []
    for ni, row in enumerate(registration):
        for mi, distance in enumerate(row):
            if distance == 0:
                continue
            detections.append(Detection(ni, mi, float(distance)))
    return detections


def compute_precision_recall(
    registration: np.ndarray,
    truth_indices: Sequence[int],
) -> List[PrecisionRecallPoint]:
    """
    Ranked-retrieval precision-recall over registration distance.

    Detections are sorted by ascending distance (stable, so ties keep trial
    order) and a point is emitted at each correct detection.

    Args:
        registration: (num_trials, num_models) distance table
        truth_indices: True model index of each trial

    Returns:
        Points in emission order; recall is non-decreasing
    """
    num_trials = len(truth_indices)
    detections = sorted(collect_detections(registration), key=lambda d: d.distance)

    points = []
    correct = 0
    for position, detection in enumerate(detections):
        if detection.model != truth_indices[detection.trial]:
            continue
        correct += 1
        points.append(
            PrecisionRecallPoint(
                precision=correct / (position + 1),
                recall=correct / num_trials,
                distance=detection.distance,
            )
        )
    return points


def compute_classifier_stats(
    classifier: np.ndarray,
    truth_indices: Sequence[int],
    count_self_tie: bool = False,
) -> ClassifierStats:
    """
    Summarize where the true model ranks among the classifier votes.

    Per trial, rank = 1 + number of candidates with strictly more votes and
    tie = number of other candidates with exactly as many. The mean uses
    rank + tie / 2; the area adds num_models - rank + 1.

    Args:
        classifier: (num_trials, num_models) vote table
        truth_indices: True model index of each trial
        count_self_tie: Also count the true model's own slot as a tie,
            which adds 0.5 to every trial's rank

    Returns:
        ClassifierStats
    """
    num_trials = len(truth_indices)
    num_models = classifier.shape[1] if classifier.ndim == 2 else 0

    total = 0.0
    area = 0
    ranks = []
    for ni, answer in enumerate(truth_indices):
        scores = classifier[ni]
        votes = scores[answer]
        rank = 1 + int(np.count_nonzero(scores > votes))
        others = np.delete(scores, answer)
        tie = int(np.count_nonzero(others == votes)) + (1 if count_self_tie else 0)
        total += rank + tie / 2
        area += num_models - rank + 1
        ranks.append(rank)

    return ClassifierStats(
        mean_rank=total / num_trials if num_trials else 0.0,
        area=area,
        max_area=num_models * num_trials,
        ranks=ranks,
    )
