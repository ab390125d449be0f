"""
Platt scaling: ``p_cal = sigmoid(A * logit(p_raw) + B)``.

Fitted on the validation split with damped Newton steps on the 2x2 Hessian of
the log-loss, starting from the identity calibration ``(A, B) = (1, 0)``.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import structlog

from quakecast.domain.entities.model import Calibration
from quakecast.domain.services.classifier import sigmoid

logger = structlog.get_logger(__name__)

PROBABILITY_EPSILON = 1e-10
SINGULAR_DETERMINANT = 1e-10


def logit(p):
    """Log-odds with ``p`` clamped to ``[1e-10, 1 - 1e-10]``."""
    clamped = np.clip(p, PROBABILITY_EPSILON, 1.0 - PROBABILITY_EPSILON)
    result = np.log(clamped / (1.0 - clamped))
    if np.ndim(result) == 0:
        return float(result)
    return result


def fit_platt(
    raw: Sequence[float],
    labels: Sequence[int],
    max_iterations: int = 100,
    damping: float = 0.1,
    tolerance: float = 1e-6,
) -> Calibration:
    """
    Fit ``(A, B)`` on raw classifier outputs and their binary labels.

    Stops early when the Hessian turns singular or when both undamped Newton
    deltas fall under ``tolerance``; otherwise returns the last iterate.
    """
    x = np.atleast_1d(logit(np.asarray(raw, dtype=np.float64)))
    y = np.asarray(labels, dtype=np.float64)
    a, b = 1.0, 0.0
    if y.size == 0:
        return Calibration(A=a, B=b)

    for iteration in range(max_iterations):
        p = np.atleast_1d(sigmoid(a * x + b))
        diff = p - y
        weight = p * (1.0 - p)

        grad_a = float(np.sum(diff * x))
        grad_b = float(np.sum(diff))
        hess_aa = float(np.sum(weight * x * x))
        hess_ab = float(np.sum(weight * x))
        hess_bb = float(np.sum(weight))

        det = hess_aa * hess_bb - hess_ab * hess_ab
        if abs(det) < SINGULAR_DETERMINANT:
            logger.debug("calibration.singular_hessian", iteration=iteration)
            break

        delta_a = -(hess_bb * grad_a - hess_ab * grad_b) / det
        delta_b = -(-hess_ab * grad_a + hess_aa * grad_b) / det

        a += damping * delta_a
        b += damping * delta_b

        if abs(delta_a) < tolerance and abs(delta_b) < tolerance:
            break

    logger.info("calibration.fitted", A=a, B=b, samples=int(y.size))
    return Calibration(A=a, B=b)


def apply_calibration(p, calibration: Calibration):
    """Works on a single probability or a numpy array of them."""
    return sigmoid(calibration.A * logit(p) + calibration.B)
