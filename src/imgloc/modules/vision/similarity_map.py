"""
Padded similarity map and non-maximum suppression.

The map holds one integer score per template anchor of the clipped search
window, surrounded by PAD zero cells on every side so that the 5x5
neighbourhood of any real cell can be read without bounds checks. A zero
score means "not a candidate".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

PAD = 2


@dataclass
class SimilarityMap:
    padded: np.ndarray   # int64, shape (rows + 2*PAD, cols + 2*PAD)
    origin_x: int = 0    # source-space x of column 0
    origin_y: int = 0    # source-space y of row 0

    @classmethod
    def from_scores(cls, scores: np.ndarray, origin_x: int = 0, origin_y: int = 0) -> "SimilarityMap":
        """Wrap an unpadded (rows, cols) score grid."""
        scores = np.asarray(scores, dtype=np.int64)
        if scores.ndim != 2:
            raise ValueError(f"Similarity scores must be 2-D, got shape {scores.shape}")
        padded = np.zeros((scores.shape[0] + 2 * PAD, scores.shape[1] + 2 * PAD), dtype=np.int64)
        padded[PAD:-PAD, PAD:-PAD] = scores
        return cls(padded=padded, origin_x=origin_x, origin_y=origin_y)

    @property
    def rows(self) -> int:
        return self.padded.shape[0] - 2 * PAD

    @property
    def cols(self) -> int:
        return self.padded.shape[1] - 2 * PAD

    @property
    def scores(self) -> np.ndarray:
        """Unpadded view."""
        return self.padded[PAD:-PAD, PAD:-PAD]

    def peaks(self) -> List[Tuple[int, int, int]]:
        """Non-maximum suppression.

        A cell survives if it is non-zero and no cell of its 5x5 neighbourhood
        is greater; equal neighbours both survive. Returns (x, y, score) in
        source coordinates, row-major order.
        """
        window = 2 * PAD + 1
        local_max = np.lib.stride_tricks.sliding_window_view(self.padded, (window, window)).max(axis=(-2, -1))
        scores = self.scores
        keep = (scores > 0) & (scores >= local_max)
        rows, cols = np.nonzero(keep)
        return [
            (int(c) + self.origin_x, int(r) + self.origin_y, int(scores[r, c]))
            for r, c in zip(rows.tolist(), cols.tolist())
        ]


__all__ = ["PAD", "SimilarityMap"]
