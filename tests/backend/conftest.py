"""
Backend test fixtures.

Provides scripted stand-ins for the model source and the detector so the
harness can be exercised without scanning or recognition.
"""

import sys
from pathlib import Path

import numpy as np
import pytest


# Add scripts directory to path
_scripts_path = Path(__file__).parent.parent.parent / "scripts"
if str(_scripts_path) not in sys.path:
    sys.path.insert(0, str(_scripts_path))

from proctor.interfaces import Detector, ModelSource  # noqa: E402


class StubModelSource(ModelSource):
    """Model source returning small fixed clouds and recording every request."""

    def __init__(self, model_ids, fail_on=None):
        self.model_ids = list(model_ids)
        self.fail_on = fail_on
        self.training_requests = []
        self.test_requests = []

    def get_model_ids(self):
        return list(self.model_ids)

    def get_training_model(self, model_id):
        self.training_requests.append(model_id)
        if model_id == self.fail_on:
            raise RuntimeError(f"scanner jammed on {model_id}")
        return np.ones((4, 3))

    def get_test_model(self, model_id):
        self.test_requests.append(model_id)
        return np.ones((4, 3))


class PerfectDetector(Detector):
    """Detector that always knows the answer: strict top vote, smallest distance."""

    def __init__(self):
        self.model_ids = []
        self.printed_timer = False

    def train(self, scene):
        self.model_ids.append(scene.model_id)

    def query(self, scene, classifier_row, registration_row):
        mi = self.model_ids.index(scene.model_id)
        classifier_row[:] = 1.0
        classifier_row[mi] = 10.0
        registration_row[:] = 5.0
        registration_row[mi] = 0.5
        return scene.model_id

    def print_timer(self):
        self.printed_timer = True
        print("perfect detector timing")


class FailingDetector(Detector):
    """Detector that writes garbage into its buffers and then raises."""

    def __init__(self):
        self.model_ids = []

    def train(self, scene):
        self.model_ids.append(scene.model_id)

    def query(self, scene, classifier_row, registration_row):
        classifier_row[:] = 7.0
        registration_row[:] = 3.0
        raise RuntimeError("registration diverged")


class ScriptedDetector(Detector):
    """Detector replaying a list of answers: model ids, QueryResults, or exceptions."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.trained = []
        self.calls = 0

    def train(self, scene):
        self.trained.append(scene.model_id)

    def query(self, scene, classifier_row, registration_row):
        answer = self.answers[self.calls % len(self.answers)]
        self.calls += 1
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def catalog():
    """Three-model catalog."""
    return ["A", "B", "C"]


@pytest.fixture
def stub_source(catalog):
    return StubModelSource(catalog)


@pytest.fixture
def perfect_detector():
    return PerfectDetector()


@pytest.fixture
def failing_detector():
    return FailingDetector()


@pytest.fixture
def scripted_detector_factory():
    return ScriptedDetector


@pytest.fixture
def stub_source_factory():
    return StubModelSource

