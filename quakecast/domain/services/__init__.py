"""
Domain Services Package

Pure numerical services of the nowcasting core: geodesy, the intensity
kernel, grid evaluation, feature extraction, the classifier, calibration,
evaluation metrics and the aftershock ring. Nothing here performs I/O.
"""

from .aftershock_ring import compute_aftershock_ring
from .calibrator import apply_calibration, fit_platt, logit
from .classifier import predict_probability, sigmoid, train_logistic_regression
from .evaluator import compute_auc, compute_brier, compute_reliability
from .feature_extractor import build_label, extract_features, extract_labeled_sample
from .geodesy import destination_point, haversine_km, normalize_longitude
from .grid_engine import build_grid, ensure_within_budget, evaluate_grid
from .intensity import intensity, probability_at_least_one

__all__ = [
    "compute_aftershock_ring",
    "apply_calibration",
    "fit_platt",
    "logit",
    "predict_probability",
    "sigmoid",
    "train_logistic_regression",
    "compute_auc",
    "compute_brier",
    "compute_reliability",
    "build_label",
    "extract_features",
    "extract_labeled_sample",
    "destination_point",
    "haversine_km",
    "normalize_longitude",
    "build_grid",
    "ensure_within_budget",
    "evaluate_grid",
    "intensity",
    "probability_at_least_one",
]
