"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from quakecast.application.models.training_config import TrainingConfig
from quakecast.domain.entities.grid import BoundingBox
from quakecast.domain.entities.kernel import KernelParams
from quakecast.shared import EnumEnvironment, EnumLogLevel

# Named training regions. Values apply to any field not set explicitly.
TRAINING_PRESETS: Dict[str, Dict[str, Any]] = {
    "global": {
        "bbox": [-180.0, -90.0, 180.0, 90.0],
        "cell_deg": 0.5,
        "label_magnitude": 4.5,
        "horizons": [7.0],
        "train_start": "2010-01-01",
        "completeness_magnitude": 4.0,
    },
    "southeast_asia": {
        "bbox": [95.0, -12.0, 141.0, 7.0],
        "cell_deg": 0.25,
        "label_magnitude": 4.5,
        "horizons": [1.0, 3.0, 7.0],
        "train_start": "2010-01-01",
        "completeness_magnitude": 4.0,
    },
    "california": {
        "bbox": [-125.0, 32.0, -114.0, 42.0],
        "cell_deg": 0.25,
        "label_magnitude": 3.5,
        "horizons": [1.0, 3.0, 7.0],
        "train_start": "2015-01-01",
        "completeness_magnitude": 3.0,
    },
    "japan": {
        "bbox": [128.0, 30.0, 146.0, 46.0],
        "cell_deg": 0.25,
        "label_magnitude": 3.5,
        "horizons": [1.0, 3.0, 7.0],
        "train_start": "2015-01-01",
        "completeness_magnitude": 3.0,
    },
    "new_zealand": {
        "bbox": [165.0, -48.0, 180.0, -34.0],
        "cell_deg": 0.25,
        "label_magnitude": 3.5,
        "horizons": [1.0, 3.0, 7.0],
        "train_start": "2015-01-01",
        "completeness_magnitude": 3.0,
    },
}


class ServiceSettings(BaseSettings):
    """Service metadata and HTTP server settings."""

    title: str = Field(default="QuakeCast", description="Service title")
    description: str = Field(
        default="Experimental earthquake nowcasting with an ETAS-style "
        "intensity kernel and a calibrated classifier",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("SERVICE_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("SERVICE_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_", case_sensitive=False, extra="ignore"
    )


class CatalogSettings(BaseSettings):
    """Upstream earthquake catalog (USGS FDSN event service) settings."""

    base_url: str = Field(
        default="https://earthquake.usgs.gov/fdsnws/event/1",
        description="FDSN event service root URL",
    )
    timeout_seconds: float = Field(
        default=30.0, gt=0, description="HTTP timeout for catalog requests"
    )
    user_agent: str = Field(
        default="quakecast/1.0", description="User-Agent sent to the catalog"
    )
    limit: Optional[int] = Field(
        default=None, ge=1, description="Optional cap on events per query"
    )

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_", case_sensitive=False, extra="ignore"
    )


class NowcastSettings(BaseSettings):
    """Online scoring settings."""

    artifacts_dir: str = Field(
        default="models", description="Directory holding the model JSON files"
    )
    model_filename: str = Field(default="nowcast.json")
    evaluation_filename: str = Field(default="nowcast_eval.json")
    max_cells: int = Field(default=1000, ge=1, description="Grid cell budget")
    min_probability: float = Field(
        default=1e-3, ge=0, le=1, description="Cells at or below are not returned"
    )
    lookback_days: float = Field(
        default=90.0, gt=0, description="Recent catalog window used for scoring"
    )
    bbox_padding_deg: float = Field(
        default=5.0, ge=0, description="Padding around the bbox for the fetch"
    )
    cache_ttl_seconds: float = Field(default=900.0, gt=0)
    cache_max_entries: int = Field(default=100, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="NOWCAST_",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=(),
    )


class RateLimitSettings(BaseSettings):
    """Per-client token bucket settings."""

    capacity: int = Field(default=30, ge=1, description="Requests per window")
    window_seconds: float = Field(default=600.0, gt=0)
    idle_seconds: float = Field(
        default=3600.0, gt=0, description="Idle time before a bucket is dropped"
    )
    cleanup_interval_seconds: float = Field(default=600.0, gt=0)
    max_clients: int = Field(default=10_000, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_", case_sensitive=False, extra="ignore"
    )


class TrainingSettings(BaseSettings):
    """Offline training pipeline settings, optionally seeded from a preset."""

    preset: Optional[str] = Field(
        default=None, description=f"One of: {', '.join(TRAINING_PRESETS)}"
    )
    bbox: List[float] = Field(
        default_factory=lambda: [95.0, -12.0, 141.0, 7.0],
        description="[minLon, minLat, maxLon, maxLat]",
    )
    cell_deg: float = Field(default=0.25, gt=0)
    label_magnitude: float = Field(default=4.5)
    horizons: List[float] = Field(
        default_factory=lambda: [1.0, 3.0, 7.0],
        description="Horizons in days; the first one is trained",
    )
    train_start: str = Field(default="2010-01-01", description="ISO date or 'now'")
    train_end: str = Field(default="now", description="ISO date or 'now'")
    holdout_days: float = Field(default=90.0, ge=0)
    completeness_magnitude: float = Field(default=4.0)
    rate_radius_km: float = Field(default=100.0, gt=0)
    sample_every_days: float = Field(default=7.0, gt=0)
    warmup_days: float = Field(default=90.0, ge=0)
    validation_days: float = Field(default=180.0, gt=0)
    l2: float = Field(default=0.01, ge=0)
    learning_rate: float = Field(default=0.01, gt=0)
    max_iterations: int = Field(default=1000, ge=1)

    kernel_k: float = Field(default=0.02)
    kernel_alpha: float = Field(default=1.1)
    kernel_p: float = Field(default=1.2)
    kernel_c: float = Field(default=0.01)
    kernel_q: float = Field(default=1.5)
    kernel_d: float = Field(default=10.0)
    kernel_m0: float = Field(default=3.0)
    kernel_time_window_days: float = Field(default=90.0)
    kernel_radius_km: float = Field(default=300.0)

    model_config = SettingsConfigDict(
        env_prefix="TRAIN_", case_sensitive=False, extra="ignore"
    )

    @field_validator("preset")
    @classmethod
    def _known_preset(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in TRAINING_PRESETS:
            raise ValueError(
                f"Unknown preset '{value}'. Available: {', '.join(TRAINING_PRESETS)}"
            )
        return value

    @field_validator("bbox")
    @classmethod
    def _four_values(cls, value: List[float]) -> List[float]:
        if len(value) != 4:
            raise ValueError("bbox must be [minLon, minLat, maxLon, maxLat]")
        return value

    def kernel_params(self) -> KernelParams:
        return KernelParams(
            K=self.kernel_k,
            alpha=self.kernel_alpha,
            p=self.kernel_p,
            c=self.kernel_c,
            q=self.kernel_q,
            d=self.kernel_d,
            M0=self.kernel_m0,
            time_window_days=self.kernel_time_window_days,
            radius_km=self.kernel_radius_km,
        )

    def to_training_config(self) -> TrainingConfig:
        values = self.model_dump()
        if self.preset is not None:
            for name, preset_value in TRAINING_PRESETS[self.preset].items():
                if name not in self.model_fields_set:
                    values[name] = preset_value

        return TrainingConfig(
            bbox=BoundingBox.from_sequence(values["bbox"]),
            cell_deg=values["cell_deg"],
            label_magnitude=values["label_magnitude"],
            horizons=tuple(values["horizons"]),
            train_start=values["train_start"],
            train_end=values["train_end"],
            holdout_days=values["holdout_days"],
            completeness_magnitude=values["completeness_magnitude"],
            rate_radius_km=values["rate_radius_km"],
            sample_every_days=values["sample_every_days"],
            warmup_days=values["warmup_days"],
            validation_days=values["validation_days"],
            l2=values["l2"],
            learning_rate=values["learning_rate"],
            max_iterations=values["max_iterations"],
            kernel_params=self.kernel_params(),
            preset=self.preset,
        )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    service: ServiceSettings = Field(default_factory=ServiceSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    nowcast: NowcastSettings = Field(default_factory=NowcastSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    training: TrainingSettings = Field(default_factory=TrainingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
