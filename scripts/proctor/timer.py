"""
Phase stopwatch for the proctor harness.

Accumulates wall-clock time per named phase across repeated start/stop pairs.
"""

import time
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Iterator


class Phase(Enum):
    """Harness phases tracked by the timer."""

    OBTAIN_CLOUD_TRAINING = "obtain training clouds"
    OBTAIN_CLOUD_TESTING = "obtain testing clouds"
    DETECTOR_TRAIN = "detector training"
    DETECTOR_TEST = "detector testing"


class TrialTimer:
    """
    Stopwatch with one accumulator per phase.

    Example:
        >>> timer = TrialTimer()
        >>> timer.start()
        >>> scan = source.get_test_model(model_id)
        >>> timer.stop(Phase.OBTAIN_CLOUD_TESTING)
    """

    def __init__(self):
        self._totals: Dict[Phase, float] = {phase: 0.0 for phase in Phase}
        self._started = time.perf_counter()

    def start(self) -> None:
        """Mark the beginning of a timed span."""
        self._started = time.perf_counter()

    def stop(self, phase: Phase) -> float:
        """
        Add the time since the last start() to a phase.

        Returns:
            Elapsed seconds of this span
        """
        elapsed = time.perf_counter() - self._started
        self._totals[phase] += elapsed
        return elapsed

    @contextmanager
    def measure(self, phase: Phase) -> Iterator[None]:
        """Time a block into a phase; the span is recorded even if the block raises."""
        self.start()
        try:
            yield
        finally:
            self.stop(phase)

    def __getitem__(self, phase: Phase) -> float:
        return self._totals[phase]

    def reset(self) -> None:
        """Zero every accumulator."""
        for phase in self._totals:
            self._totals[phase] = 0.0

    def as_dict(self) -> Dict[str, float]:
        """Accumulated seconds keyed by phase name."""
        return {phase.name.lower(): seconds for phase, seconds in self._totals.items()}

    def format_report(self) -> str:
        """Render the timing block, one phase per line."""
        width = max(len(phase.value) for phase in Phase) + 1
        return "\n".join(
            f"{phase.value + ':':<{width}} {self._totals[phase]:10.3f} sec"
            for phase in Phase
        )
