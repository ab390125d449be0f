"""
Classifier - L2-regularized logistic regression.

Training runs batch gradient descent on standardized features with
class-imbalance weighting (positives weighted by negatives/positives), then
folds the standardization back into the coefficients so the exported model
scores raw feature values directly.

Each iteration is a pure ``TrainingState -> TrainingState`` step. Training
always runs ``max_iterations`` steps; non-convergence is visible only through
the logged loss trend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence, Tuple

import numpy as np
import structlog

from quakecast.domain.entities.errors import ClassifierTrainingError
from quakecast.domain.entities.features import FEATURE_NAMES, LabeledSample
from quakecast.domain.entities.model import LogisticModel

logger = structlog.get_logger(__name__)

SIGMOID_CLAMP = 50.0
LOG_EPSILON = 1e-10
LOG_EVERY = 100


def sigmoid(z):
    """Logistic function with the exponent clamped to [-50, 50]."""
    clipped = np.clip(z, -SIGMOID_CLAMP, SIGMOID_CLAMP)
    result = 1.0 / (1.0 + np.exp(-clipped))
    if np.ndim(result) == 0:
        return float(result)
    return result


@dataclass(frozen=True)
class Standardizer:
    """Per-feature mean/std fitted on the training set (std floor of 1 for 0)."""

    means: np.ndarray
    stds: np.ndarray

    @classmethod
    def fit(cls, matrix: np.ndarray) -> "Standardizer":
        means = matrix.mean(axis=0)
        stds = matrix.std(axis=0)
        stds = np.where(stds > 0, stds, 1.0)
        return cls(means=means, stds=stds)

    def transform(self, matrix: np.ndarray) -> np.ndarray:
        return (matrix - self.means) / self.stds

    def destandardize(
        self, intercept: float, weights: np.ndarray
    ) -> Tuple[float, np.ndarray]:
        coeffs = weights / self.stds
        return intercept - float(np.sum(weights * self.means / self.stds)), coeffs


@dataclass(frozen=True)
class TrainingState:
    intercept: float
    weights: np.ndarray
    iteration: int = 0
    loss: float = float("nan")


def samples_to_matrix(
    samples: Sequence[LabeledSample], feature_names: Sequence[str] = FEATURE_NAMES
) -> Tuple[np.ndarray, np.ndarray]:
    matrix = np.array(
        [[s.features.get(name, 0.0) for name in feature_names] for s in samples],
        dtype=np.float64,
    ).reshape(len(samples), len(feature_names))
    labels = np.array([sample.label for sample in samples], dtype=np.float64)
    return matrix, labels


def class_weights(labels: np.ndarray) -> np.ndarray:
    positives = int(np.count_nonzero(labels == 1))
    negatives = labels.size - positives
    positive_weight = negatives / positives if positives > 0 else 1.0
    return np.where(labels == 1, positive_weight, 1.0)


def gradient_step(
    state: TrainingState,
    x: np.ndarray,
    y: np.ndarray,
    sample_weights: np.ndarray,
    l2: float,
    learning_rate: float,
) -> TrainingState:
    """One batch gradient-descent update of weighted log-loss."""
    n = y.size
    predictions = sigmoid(state.intercept + x @ state.weights)
    errors = (predictions - y) * sample_weights

    grad_intercept = float(errors.sum())
    grad_weights = x.T @ errors

    loss = float(
        np.sum(
            -sample_weights
            * (
                y * np.log(predictions + LOG_EPSILON)
                + (1 - y) * np.log(1 - predictions + LOG_EPSILON)
            )
        )
        / n
    )

    return TrainingState(
        intercept=state.intercept - learning_rate * grad_intercept / n,
        weights=state.weights
        - learning_rate * (grad_weights / n + l2 * state.weights),
        iteration=state.iteration + 1,
        loss=loss,
    )


def train_logistic_regression(
    samples: Sequence[LabeledSample],
    l2: float = 0.01,
    learning_rate: float = 0.01,
    max_iterations: int = 1000,
    feature_names: Sequence[str] = FEATURE_NAMES,
) -> LogisticModel:
    """
    Fit the classifier.

    Raises:
        ClassifierTrainingError: If ``samples`` is empty.
    """
    if not samples:
        raise ClassifierTrainingError("Cannot train a classifier without samples")

    raw, y = samples_to_matrix(samples, feature_names)
    standardizer = Standardizer.fit(raw)
    x = standardizer.transform(raw)
    weights = class_weights(y)

    logger.info(
        "classifier.training.start",
        samples=int(y.size),
        positives=int(np.count_nonzero(y == 1)),
        negatives=int(np.count_nonzero(y == 0)),
        positive_weight=float(weights.max()) if y.size else 1.0,
    )

    state = TrainingState(intercept=0.0, weights=np.zeros(len(feature_names)))
    for _ in range(max_iterations):
        state = gradient_step(state, x, y, weights, l2, learning_rate)
        if (state.iteration - 1) % LOG_EVERY == 0:
            logger.info(
                "classifier.training.iteration",
                iteration=state.iteration - 1,
                loss=round(state.loss, 6),
            )

    intercept, coeffs = standardizer.destandardize(state.intercept, state.weights)

    logger.info(
        "classifier.training.completed",
        iterations=state.iteration,
        final_loss=state.loss,
        intercept=intercept,
    )

    return LogisticModel(
        intercept=intercept,
        coeffs={name: float(c) for name, c in zip(feature_names, coeffs)},
        feature_names=tuple(feature_names),
    )


def linear_score(features: Mapping[str, float], model: LogisticModel) -> float:
    z = model.intercept
    for name in model.feature_names:
        z += features.get(name, 0.0) * model.coeffs.get(name, 0.0)
    return z


def predict_probability(
    features: Mapping[str, float], model: LogisticModel
) -> float:
    """Raw (uncalibrated) probability for one feature vector."""
    return sigmoid(linear_score(features, model))


def predict_many(
    samples: Sequence[LabeledSample], model: LogisticModel
) -> np.ndarray:
    return np.array(
        [predict_probability(s.features, model) for s in samples], dtype=np.float64
    )


def feature_ranking(model: LogisticModel) -> Sequence[Tuple[str, float]]:
    """Features sorted by ``|coefficient|`` descending."""
    return sorted(
        ((name, float(model.coeffs.get(name, 0.0))) for name in model.feature_names),
        key=lambda item: abs(item[1]),
        reverse=True,
    )
