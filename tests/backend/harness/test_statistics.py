"""
Tests for result statistics.

Tests the precision-recall curve and the classifier rank summary.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add scripts directory to path
scripts_dir = Path(__file__).parent.parent.parent.parent / "scripts"
if str(scripts_dir) not in sys.path:
    sys.path.insert(0, str(scripts_dir))

from proctor.statistics import (
    ClassifierStats,
    Detection,
    PrecisionRecallPoint,
    collect_detections,
    compute_classifier_stats,
    compute_precision_recall,
)


class TestCollectDetections:
    """Test detection extraction from the registration table."""

    def test_skips_zero_entries(self):
        registration = np.array([[0.0, 0.3], [0.2, 0.0]])

        detections = collect_detections(registration)

        assert detections == [Detection(0, 1, 0.3), Detection(1, 0, 0.2)]

    def test_all_zero(self):
        assert collect_detections(np.zeros((3, 4))) == []


class TestPrecisionRecall:
    """Test compute_precision_recall."""

    def test_hand_computed_curve(self):
        """Test a small curve computed by hand."""
        # trial 0 truth 0, trial 1 truth 1, trial 2 truth 0
        registration = np.array([
            [0.1, 0.4, 0.0],
            [0.3, 0.2, 0.0],
            [0.0, 0.05, 0.6],
        ])
        truth = [0, 1, 0]

        points = compute_precision_recall(registration, truth)

        # sorted: 0.05 (t2,m1 wrong), 0.1 (t0,m0 right), 0.2 (t1,m1 right),
        #         0.3 (t1,m0 wrong), 0.4 (t0,m1 wrong), 0.6 (t2,m2 wrong)
        assert points == [
            PrecisionRecallPoint(precision=1 / 2, recall=1 / 3, distance=0.1),
            PrecisionRecallPoint(precision=2 / 3, recall=2 / 3, distance=0.2),
        ]

    def test_zero_distance_never_a_detection(self):
        """Test that a 0 at the true slot is not counted as a hit."""
        registration = np.array([[0.0, 0.5], [0.0, 0.7]])
        truth = [0, 0]

        assert compute_precision_recall(registration, truth) == []

    def test_recall_monotone_and_formulas(self):
        """Test recall is non-decreasing and both ratios follow the ranking."""
        rng = np.random.default_rng(3)
        num_trials, num_models = 12, 5
        registration = rng.uniform(0.1, 2.0, size=(num_trials, num_models))
        registration[rng.uniform(size=registration.shape) < 0.4] = 0.0
        truth = [ni % num_models for ni in range(num_trials)]

        points = compute_precision_recall(registration, truth)
        ranking = sorted(collect_detections(registration), key=lambda d: d.distance)

        recalls = [p.recall for p in points]
        assert recalls == sorted(recalls)
        correct = 0
        emitted = iter(points)
        for position, detection in enumerate(ranking):
            if detection.model == truth[detection.trial]:
                correct += 1
                point = next(emitted)
                assert point.recall == pytest.approx(correct / num_trials)
                assert point.precision == pytest.approx(correct / (position + 1))
                assert point.distance == detection.distance

    def test_ties_keep_trial_order(self):
        """Test that equal distances rank in trial-major insertion order."""
        registration = np.array([[0.5, 0.5], [0.5, 0.5]])
        truth = [1, 0]

        points = compute_precision_recall(registration, truth)

        # order: (0,0) wrong, (0,1) right, (1,0) right, (1,1) wrong
        assert [p.precision for p in points] == [pytest.approx(1 / 2), pytest.approx(2 / 3)]

    def test_point_format(self):
        point = PrecisionRecallPoint(precision=0.5, recall=0.25, distance=0.125)

        assert point.format() == "0.500000 0.250000 0.125"


class TestClassifierStats:
    """Test compute_classifier_stats."""

    def test_perfect_run(self):
        """Test that a strictly maximal true vote gives mean rank 1 and full area."""
        num_trials, num_models = 7, 4
        classifier = np.ones((num_trials, num_models))
        truth = [ni % num_models for ni in range(num_trials)]
        for ni, mi in enumerate(truth):
            classifier[ni, mi] = 9.0

        stats = compute_classifier_stats(classifier, truth)

        assert stats.mean_rank == 1.0
        assert stats.area == num_models * num_trials
        assert stats.area == stats.max_area
        assert stats.ranks == [1] * num_trials

    def test_self_tie_adds_half(self):
        """Test the legacy self-inclusive tie count."""
        classifier = np.array([[9.0, 1.0, 1.0]])

        stats = compute_classifier_stats(classifier, [0], count_self_tie=True)

        assert stats.mean_rank == 1.5

    def test_rank_and_ties(self):
        """Test rank counts strictly greater votes and ties use the midpoint."""
        classifier = np.array([
            [1.0, 3.0, 2.0, 2.0],  # truth 2: one above, one other tie
            [0.0, 0.0, 0.0, 0.0],  # truth 1: all tie
        ])

        stats = compute_classifier_stats(classifier, [2, 1])

        assert stats.ranks == [2, 1]
        # ((2 + 1/2) + (1 + 3/2)) / 2
        assert stats.mean_rank == pytest.approx(2.5)
        # (4 - 2 + 1) + (4 - 1 + 1)
        assert stats.area == 7

    def test_rank_bounds(self):
        """Test every rank lies in [1, num_models]."""
        rng = np.random.default_rng(8)
        classifier = rng.integers(0, 4, size=(30, 6)).astype(float)
        truth = [ni % 6 for ni in range(30)]

        stats = compute_classifier_stats(classifier, truth)

        assert all(1 <= rank <= 6 for rank in stats.ranks)
        assert 0 < stats.area <= stats.max_area

    def test_nan_true_vote_keeps_rank_floor(self):
        """Test that a NaN vote for the true model never ranks above first."""
        classifier = np.array([[np.nan, 1.0, 2.0]])

        stats = compute_classifier_stats(classifier, [0])
        with_self_tie = compute_classifier_stats(classifier, [0], count_self_tie=True)

        assert stats.ranks == [1]
        assert stats.mean_rank == 1.0
        assert with_self_tie.mean_rank == 1.5

    def test_zeroed_rows_tie_everything(self):
        """Test that an abstained trial ranks first with every other model tied."""
        stats = compute_classifier_stats(np.zeros((1, 5)), [3])

        assert stats.ranks == [1]
        assert stats.mean_rank == 3.0
        assert stats.area == 5

    def test_no_trials(self):
        stats = compute_classifier_stats(np.zeros((0, 3)), [])

        assert stats.mean_rank == 0.0
        assert stats.area == 0
        assert stats.max_area == 0

    def test_format(self):
        stats = ClassifierStats(mean_rank=1.25, area=12, max_area=12)
        lines = stats.format().splitlines()

        assert lines[0].startswith("average vote rank of correct model:")
        assert lines[0].endswith("1.25")
        assert lines[1].endswith("12")
