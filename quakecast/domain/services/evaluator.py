"""Scoring metrics for the held-out validation split."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np

from quakecast.domain.entities.evaluation import ReliabilityBin


def compute_auc(predictions: Sequence[float], labels: Sequence[int]) -> float:
    """
    Area under the ROC curve by ranking predictions in descending order.

    Each negative contributes the number of positives ranked above it. Ties
    keep their input order. Returns 0.5 when either class is absent.
    """
    p = np.asarray(predictions, dtype=np.float64)
    y = np.asarray(labels)
    order = np.argsort(-p, kind="stable")
    ranked_positive = y[order] == 1

    positives = int(np.count_nonzero(ranked_positive))
    negatives = ranked_positive.size - positives
    if positives == 0 or negatives == 0:
        return 0.5

    positives_above = np.cumsum(ranked_positive)
    wins = float(np.sum(positives_above[~ranked_positive]))
    return wins / (positives * negatives)


def compute_brier(predictions: Sequence[float], labels: Sequence[int]) -> float:
    p = np.asarray(predictions, dtype=np.float64)
    if p.size == 0:
        return 0.0
    y = np.asarray(labels, dtype=np.float64)
    return float(np.mean((p - y) ** 2))


def compute_reliability(
    predictions: Sequence[float], labels: Sequence[int], n_bins: int = 10
) -> List[ReliabilityBin]:
    """Equal-width bins over ``[0, 1)``; only non-empty bins are returned."""
    p = np.asarray(predictions, dtype=np.float64)
    y = np.asarray(labels, dtype=np.float64)
    bins: List[ReliabilityBin] = []
    for b in range(n_bins):
        low = b / n_bins
        high = (b + 1) / n_bins
        in_bin = (p >= low) & (p < high)
        count = int(np.count_nonzero(in_bin))
        if count == 0:
            continue
        bins.append(
            ReliabilityBin(
                pred_mean=float(p[in_bin].mean()),
                obs_mean=float(y[in_bin].mean()),
                count=count,
            )
        )
    return bins
