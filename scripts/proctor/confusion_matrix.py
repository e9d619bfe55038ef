"""
Truth-vs-guess count table keyed by model id.
"""

from typing import Dict, List

from tabulate import tabulate


class ConfusionMatrix:
    """
    Sparse confusion matrix.

    Ids are never pre-registered: an id becomes a row the first time it is
    seen as truth and a column the first time it is guessed.
    """

    def __init__(self):
        self._cells: Dict[str, Dict[str, int]] = {}
        self._guess_ids: Dict[str, None] = {}  # insertion-ordered set

    def increment(self, truth_id: str, guess_id: str) -> None:
        """Count one (truth, guess) outcome."""
        row = self._cells.setdefault(truth_id, {})
        row[guess_id] = row.get(guess_id, 0) + 1
        self._guess_ids.setdefault(guess_id, None)

    def count(self, truth_id: str, guess_id: str) -> int:
        return self._cells.get(truth_id, {}).get(guess_id, 0)

    def trace(self) -> int:
        """Number of correct guesses."""
        return sum(row.get(truth_id, 0) for truth_id, row in self._cells.items())

    def total(self) -> int:
        """Number of recorded guesses."""
        return sum(sum(row.values()) for row in self._cells.values())

    def accuracy(self) -> float:
        total = self.total()
        return self.trace() / total if total else 0.0

    def truth_ids(self) -> List[str]:
        return list(self._cells)

    def guess_ids(self) -> List[str]:
        return list(self._guess_ids)

    def format_matrix(self) -> str:
        """Render observed truth ids (rows) against observed guess ids (columns)."""
        columns = self.guess_ids()
        rows = [
            [truth_id] + [self.count(truth_id, guess_id) for guess_id in columns]
            for truth_id in self.truth_ids()
        ]
        return tabulate(rows, headers=["truth \\ guess"] + columns, tablefmt="simple")

    def print_matrix(self) -> None:
        print(self.format_matrix())

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {truth_id: dict(row) for truth_id, row in self._cells.items()}
