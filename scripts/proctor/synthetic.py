"""
Proctor - Synthetic Collaborators

A model source that fabricates point clouds and a simple shape-descriptor
detector, so the harness can run end to end without a scanner or a real
recognizer.

Usage:
    source = SyntheticModelSource(ProctorConfig.quick())
    detector = CentroidDetector()
    proctor = Proctor(source, source.config)
"""

import time
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from common.config_utils import ProctorConfig, SyntheticConfig
from common.constants import DEFAULT_MODEL_ID_PREFIX
from common.exceptions import QueryError

from proctor.interfaces import Detector, ModelSource, QueryResult, Scene


def rotation_matrix(theta: float, phi: float) -> np.ndarray:
    """Rotation that tilts by theta about y, then turns by phi about z."""
    ct, st = np.cos(theta), np.sin(theta)
    cp, sp = np.cos(phi), np.sin(phi)
    tilt = np.array([[ct, 0.0, st], [0.0, 1.0, 0.0], [-st, 0.0, ct]])
    turn = np.array([[cp, -sp, 0.0], [sp, cp, 0.0], [0.0, 0.0, 1.0]])
    return turn @ tilt


class SyntheticModelSource(ModelSource):
    """
    Fabricates one ellipsoid-like cloud per catalog model.

    Training scans come from the configured viewpoint grid; test scans come
    from a random viewpoint inside the theta/phi bounds, drawn from the
    process-global numpy generator so a seeded test run is reproducible.
    """

    def __init__(
        self,
        config: Optional[ProctorConfig] = None,
        synthetic: Optional[SyntheticConfig] = None,
        model_seed: int = 1234,
    ):
        self.config = config or ProctorConfig()
        self.synthetic = synthetic or SyntheticConfig()
        self._rng = np.random.default_rng(model_seed)

        self.model_ids = [
            f"{DEFAULT_MODEL_ID_PREFIX}{i:03d}" for i in range(self.config.num_models)
        ]
        self.models: Dict[str, np.ndarray] = {
            model_id: self._make_model() for model_id in self.model_ids
        }
        self._training_scans: Dict[str, int] = {}

    def _make_model(self) -> np.ndarray:
        directions = self._rng.normal(size=(self.synthetic.num_points, 3))
        directions /= np.linalg.norm(directions, axis=1, keepdims=True)
        radii = self._rng.uniform(0.2, 1.0, size=3)
        bumps = 1.0 + 0.2 * np.sin(self._rng.integers(1, 5) * directions[:, :1])
        return directions * radii * bumps

    def get_model_ids(self) -> List[str]:
        return list(self.model_ids)

    def grid_viewpoint(self, index: int) -> tuple:
        """(theta, phi) of the index-th viewpoint in the scanning grid."""
        cfg = self.config
        theta = cfg.theta_start + (index // cfg.phi_count % cfg.theta_count) * cfg.theta_step
        phi = cfg.phi_start + (index % cfg.phi_count) * cfg.phi_step
        return theta, phi

    def random_viewpoint(self) -> tuple:
        cfg = self.config
        theta = np.random.uniform(cfg.theta_min, cfg.theta_max)
        phi = np.random.uniform(cfg.phi_min, cfg.phi_max)
        return theta, phi

    def scan(self, model_id: str, theta: float, phi: float, rng=np.random) -> np.ndarray:
        """
        Simulate a scan: rotate into the viewer frame, hide the far side,
        add sensor noise.
        """
        cloud = self.models[model_id] @ rotation_matrix(theta, phi).T
        keep = int(round(len(cloud) * (1.0 - self.synthetic.occlusion_ratio)))
        visible = cloud[np.argsort(cloud[:, 2])[:keep]]
        return visible + rng.normal(scale=self.synthetic.noise, size=visible.shape)

    def get_training_model(self, model_id: str) -> np.ndarray:
        index = self._training_scans.get(model_id, 0)
        self._training_scans[model_id] = index + 1
        theta, phi = self.grid_viewpoint(index)
        return self.scan(model_id, theta, phi, rng=self._rng)

    def get_test_model(self, model_id: str) -> np.ndarray:
        theta, phi = self.random_viewpoint()
        return self.scan(model_id, theta, phi)


def radial_descriptor(cloud: np.ndarray, bins: int) -> np.ndarray:
    """Normalized histogram of point distances from the centroid."""
    centered = cloud - cloud.mean(axis=0)
    radii = np.linalg.norm(centered, axis=1)
    hist, _ = np.histogram(radii, bins=bins, range=(0.0, 1.5))
    return hist / max(hist.sum(), 1)


def mean_nearest_distance(source: np.ndarray, target: np.ndarray) -> float:
    """Mean distance from each centered source point to its nearest centered target point."""
    a = source - source.mean(axis=0)
    b = target - target.mean(axis=0)
    squared = ((a[:, None, :] - b[None, :, :]) ** 2).sum(axis=2)
    return float(np.sqrt(squared.min(axis=1)).mean())


class CentroidDetector(Detector):
    """
    Two-stage recognizer over radial shape descriptors.

    The classifier stage scores every trained model by negative descriptor
    distance; the registration stage aligns centroids for the best few
    candidates and guesses the closest fit.
    """

    def __init__(self, synthetic: Optional[SyntheticConfig] = None):
        self.synthetic = synthetic or SyntheticConfig()
        self.model_ids: List[str] = []
        self.descriptors: List[np.ndarray] = []
        self.clouds: List[np.ndarray] = []
        self.timing = {"training": 0.0, "classification": 0.0, "registration": 0.0}

    def train(self, scene: Scene) -> None:
        cloud = np.asarray(scene.cloud, dtype=float)
        if cloud.ndim != 2 or len(cloud) == 0:
            raise ValueError(f"Empty training cloud for {scene.model_id}")

        start = time.perf_counter()
        self.model_ids.append(scene.model_id)
        self.descriptors.append(radial_descriptor(cloud, self.synthetic.descriptor_bins))
        self.clouds.append(cloud)
        self.timing["training"] += time.perf_counter() - start

    def query(
        self,
        scene: Scene,
        classifier_row: np.ndarray,
        registration_row: np.ndarray,
    ) -> Union[QueryResult, str]:
        cloud = np.asarray(scene.cloud, dtype=float)
        if cloud.ndim != 2 or len(cloud) == 0:
            raise QueryError("Scene contains no points", model_id=scene.model_id)
        if not self.model_ids:
            return QueryResult.failure("detector has not been trained")

        start = time.perf_counter()
        descriptor = radial_descriptor(cloud, self.synthetic.descriptor_bins)
        scores = -np.linalg.norm(np.asarray(self.descriptors) - descriptor, axis=1)
        n = min(len(scores), len(classifier_row))
        classifier_row[:n] = scores[:n]
        self.timing["classification"] += time.perf_counter() - start

        start = time.perf_counter()
        candidates = self._top_candidates(scores[:n])
        distances = {}
        for mi in candidates:
            # 0 is reserved for "not attempted"
            distance = max(mean_nearest_distance(cloud, self.clouds[mi]), np.finfo(float).tiny)
            registration_row[mi] = distance
            distances[mi] = distance
        self.timing["registration"] += time.perf_counter() - start

        best = min(distances, key=distances.get)
        return QueryResult.success(self.model_ids[best])

    def _top_candidates(self, scores: Sequence[float]) -> List[int]:
        order = np.argsort(-np.asarray(scores), kind="stable")
        return [int(mi) for mi in order[: self.synthetic.max_registrations]]

    def print_timer(self) -> None:
        for name, seconds in self.timing.items():
            print(f"{name + ':':<16} {seconds:10.3f} sec")
