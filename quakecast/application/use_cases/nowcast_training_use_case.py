"""
Application Use Case - Nowcast Training

Runs the offline pipeline that produces a model artifact and its evaluation
report:
  * Fetch the historical catalog for the training period
  * Sample (time, cell) pairs on a weekly cadence after a warm-up period
  * Extract causal features and look-ahead labels
  * Split temporally, train the classifier, calibrate and evaluate
  * Persist the artifact and the report
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence, Tuple

import numpy as np
import structlog

from quakecast.application.dtos.training_dto import TrainingResultDTO
from quakecast.application.models.training_config import TrainingConfig
from quakecast.domain.entities.errors import TrainingPipelineError
from quakecast.domain.entities.evaluation import (
    DatasetStats,
    EvaluationReport,
    FeatureImportance,
    ScoreMetrics,
)
from quakecast.domain.entities.event import EventCatalog
from quakecast.domain.entities.features import FeatureSettings, LabeledSample
from quakecast.domain.entities.grid import Grid
from quakecast.domain.entities.model import ArtifactConfig, ModelArtifact
from quakecast.domain.gateways.catalog_gateway import ICatalogGateway
from quakecast.domain.repositories.model_artifacts_repository import (
    IModelArtifactsRepository,
)
from quakecast.domain.services.calibrator import apply_calibration, fit_platt
from quakecast.domain.services.classifier import (
    feature_ranking,
    predict_many,
    train_logistic_regression,
)
from quakecast.domain.services.evaluator import (
    compute_auc,
    compute_brier,
    compute_reliability,
)
from quakecast.domain.services.feature_extractor import extract_labeled_sample
from quakecast.domain.services.grid_engine import build_grid

logger = structlog.get_logger(__name__)

PROGRESS_EVERY = 10_000


class NowcastTrainingUseCase:
    """Use case for training, calibrating and evaluating the nowcast model."""

    def __init__(
        self,
        catalog_gateway: ICatalogGateway,
        artifacts_repository: IModelArtifactsRepository,
    ):
        self.catalog_gateway = catalog_gateway
        self.artifacts_repository = artifacts_repository

    async def execute(
        self, config: TrainingConfig, now: Optional[datetime] = None
    ) -> TrainingResultDTO:
        """
        Run the full training pipeline.

        Args:
            config: Region, period, label and optimizer settings
            now: Reference time used to resolve ``"now"`` dates

        Returns:
            Summary of the persisted artifact and its validation metrics

        Raises:
            CatalogUnavailableError: When the historical catalog cannot be fetched
            TrainingPipelineError: When no usable train/validation split exists
        """
        now = now or datetime.now(timezone.utc)
        start, end = config.resolve_period(now)
        horizon = config.horizon_days

        logger.info(
            "training.start",
            preset=config.preset,
            bbox=config.bbox.to_list(),
            cell_deg=config.cell_deg,
            horizon_days=horizon,
            start=start.date().isoformat(),
            end=end.date().isoformat(),
        )

        events = await self.catalog_gateway.fetch_events(
            start=start,
            end=end,
            min_magnitude=config.fetch_min_magnitude,
            bbox=config.bbox,
        )
        catalog = EventCatalog.from_events(events)
        logger.info("training.catalog_loaded", events=len(catalog))

        grid = build_grid(config.bbox, config.cell_deg)
        time_points = self._sample_time_points(config, start, end)
        logger.info(
            "training.grid_built",
            cells=len(grid.cells),
            time_points=len(time_points),
        )

        samples = self._extract_samples(config, grid, time_points, catalog)
        train_samples, val_samples = self._temporal_split(config, samples, end)

        positives = sum(sample.label for sample in samples)
        positive_rate = positives / len(samples)
        logger.info(
            "training.dataset_ready",
            samples=len(samples),
            positives=positives,
            positive_rate=round(positive_rate, 6),
            train_samples=len(train_samples),
            val_samples=len(val_samples),
        )

        model = train_logistic_regression(
            train_samples,
            l2=config.l2,
            learning_rate=config.learning_rate,
            max_iterations=config.max_iterations,
        )

        val_labels = np.array([s.label for s in val_samples], dtype=np.float64)
        raw_predictions = predict_many(val_samples, model)
        raw_metrics = ScoreMetrics(
            auc=compute_auc(raw_predictions, val_labels),
            brier=compute_brier(raw_predictions, val_labels),
        )

        calibration = fit_platt(raw_predictions, val_labels)
        calibrated_predictions = np.atleast_1d(
            apply_calibration(raw_predictions, calibration)
        )
        calibrated_metrics = ScoreMetrics(
            auc=compute_auc(calibrated_predictions, val_labels),
            brier=compute_brier(calibrated_predictions, val_labels),
        )

        trained_at = datetime.now(timezone.utc)
        artifact = ModelArtifact(
            config=ArtifactConfig(
                bbox=config.bbox,
                cell_deg=config.cell_deg,
                label_magnitude=config.label_magnitude,
                horizon_days=horizon,
                completeness_magnitude=config.completeness_magnitude,
                rate_radius_km=config.rate_radius_km,
            ),
            model=model,
            calibration=calibration,
            kernel_params=config.kernel_params,
            trained_at=trained_at,
        )
        report = EvaluationReport(
            dataset=DatasetStats(
                train_samples=len(train_samples),
                val_samples=len(val_samples),
                positive_rate=positive_rate,
            ),
            raw=raw_metrics,
            calibrated=calibrated_metrics,
            reliability=compute_reliability(calibrated_predictions, val_labels),
            feature_importance=[
                FeatureImportance(name=name, coeff=coeff)
                for name, coeff in feature_ranking(model)
            ],
            evaluated_at=trained_at,
        )

        artifact_location = await self.artifacts_repository.save_artifact(artifact)
        evaluation_location = await self.artifacts_repository.save_evaluation(report)

        logger.info(
            "training.completed",
            artifact=artifact_location,
            evaluation=evaluation_location,
            auc_raw=round(raw_metrics.auc, 4),
            auc_calibrated=round(calibrated_metrics.auc, 4),
            brier_calibrated=round(calibrated_metrics.brier, 4),
            calibration_a=calibration.A,
            calibration_b=calibration.B,
        )

        return TrainingResultDTO.from_domain(
            artifact, report, artifact_location, evaluation_location
        )

    def _sample_time_points(
        self, config: TrainingConfig, start: datetime, end: datetime
    ) -> List[datetime]:
        first = start + timedelta(days=config.warmup_days)
        last = end - timedelta(days=config.horizon_days)
        step = timedelta(days=config.sample_every_days)

        points = []
        current = first
        while current < last:
            points.append(current)
            current += step
        return points

    def _extract_samples(
        self,
        config: TrainingConfig,
        grid: Grid,
        time_points: Sequence[datetime],
        catalog: EventCatalog,
    ) -> List[LabeledSample]:
        settings = FeatureSettings(
            label_magnitude=config.label_magnitude,
            radius_km=config.rate_radius_km,
        )
        total = len(time_points) * len(grid.cells)
        if total == 0:
            raise TrainingPipelineError(
                "No (time, cell) pairs to sample; the training period is shorter "
                "than the warm-up plus horizon",
                details={"time_points": len(time_points), "cells": len(grid.cells)},
            )

        samples: List[LabeledSample] = []
        for moment in time_points:
            for cell in grid.cells:
                samples.append(
                    extract_labeled_sample(
                        cell.lat,
                        cell.lon,
                        moment,
                        catalog,
                        settings,
                        config.horizon_days,
                        config.kernel_params,
                    )
                )
                if len(samples) % PROGRESS_EVERY == 0:
                    logger.info(
                        "training.extraction_progress",
                        extracted=len(samples),
                        total=total,
                        percent=round(100.0 * len(samples) / total, 1),
                    )
        return samples

    def _temporal_split(
        self,
        config: TrainingConfig,
        samples: Sequence[LabeledSample],
        end: datetime,
    ) -> Tuple[List[LabeledSample], List[LabeledSample]]:
        """Last ``validation_days`` before the sampling boundary go to validation."""
        boundary = end - timedelta(days=config.horizon_days)
        split_time = boundary - timedelta(days=config.validation_days)

        train = [s for s in samples if s.time < split_time]
        validation = [s for s in samples if s.time >= split_time]
        if not train or not validation:
            raise TrainingPipelineError(
                "Temporal split produced an empty partition",
                details={
                    "split_time": split_time.isoformat(),
                    "train_samples": len(train),
                    "val_samples": len(validation),
                },
            )
        return train, validation
