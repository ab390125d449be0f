"""
JSON Model Artifacts Repository - Infrastructure Layer

This module implements the ModelArtifactsRepository interface on the local
filesystem. The artifact and its evaluation report are each stored as one
pretty-printed JSON document; writes go through a temporary file and an
atomic rename so readers never observe a partial artifact.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import structlog

from quakecast.domain.entities.errors import (
    ModelArtifactFormatError,
    ModelArtifactNotFoundError,
)
from quakecast.domain.entities.evaluation import EvaluationReport
from quakecast.domain.entities.model import ModelArtifact
from quakecast.domain.repositories.model_artifacts_repository import (
    IModelArtifactsRepository,
)

logger = structlog.get_logger(__name__)

DEFAULT_MODEL_FILENAME = "nowcast.json"
DEFAULT_EVALUATION_FILENAME = "nowcast_eval.json"


class JsonModelArtifactsRepository(IModelArtifactsRepository):
    """Filesystem implementation of the ModelArtifactsRepository."""

    def __init__(
        self,
        artifacts_dir: str,
        model_filename: str = DEFAULT_MODEL_FILENAME,
        evaluation_filename: str = DEFAULT_EVALUATION_FILENAME,
    ):
        """
        Initialize the repository.

        Args:
            artifacts_dir: Directory holding the JSON documents
            model_filename: File name of the model artifact
            evaluation_filename: File name of the evaluation report
        """
        self.artifacts_dir = Path(artifacts_dir)
        self.model_path = self.artifacts_dir / model_filename
        self.evaluation_path = self.artifacts_dir / evaluation_filename

    async def save_artifact(self, artifact: ModelArtifact) -> str:
        await asyncio.to_thread(self._write_json, self.model_path, artifact.to_dict())
        logger.info(
            "artifact.saved", path=str(self.model_path), version=artifact.version
        )
        return str(self.model_path)

    async def load_artifact(self) -> ModelArtifact:
        if not self.model_path.is_file():
            logger.warning("artifact.not_found", path=str(self.model_path))
            raise ModelArtifactNotFoundError(str(self.model_path))

        payload = await asyncio.to_thread(self._read_json, self.model_path)
        artifact = ModelArtifact.from_dict(payload)
        logger.info(
            "artifact.loaded",
            path=str(self.model_path),
            version=artifact.version,
            trained=artifact.trained_at.isoformat(),
        )
        return artifact

    async def save_evaluation(self, report: EvaluationReport) -> str:
        await asyncio.to_thread(
            self._write_json, self.evaluation_path, report.to_dict()
        )
        logger.info("evaluation.saved", path=str(self.evaluation_path))
        return str(self.evaluation_path)

    async def load_evaluation(self) -> Optional[EvaluationReport]:
        if not self.evaluation_path.is_file():
            return None
        payload = await asyncio.to_thread(self._read_json, self.evaluation_path)
        try:
            return EvaluationReport.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise ModelArtifactFormatError(
                f"Invalid evaluation report: {exc}",
                details={"path": str(self.evaluation_path)},
            ) from exc

    async def artifact_exists(self) -> bool:
        return self.model_path.is_file()

    def _read_json(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ModelArtifactFormatError(
                f"{path.name} is not valid JSON: {exc}", details={"path": str(path)}
            ) from exc

    def _write_json(self, path: Path, payload: Dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
