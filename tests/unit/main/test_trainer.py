from __future__ import annotations

from types import SimpleNamespace

from quakecast.domain.entities.errors import DomainError
from quakecast.main import trainer


class _StubTrainingUseCase:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.configs = []

    async def execute(self, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            artifact_location="models/nowcast.json",
            evaluation_location="models/nowcast_eval.json",
        )


def _patch_container(monkeypatch, use_case: _StubTrainingUseCase) -> None:
    container = SimpleNamespace(nowcast_training_use_case=lambda: use_case)
    monkeypatch.setattr(
        "quakecast.main.trainer.init_container", lambda settings: container
    )


def test_trainer_runs_pipeline_with_preset(monkeypatch) -> None:
    monkeypatch.setenv("TRAIN_PRESET", "new_zealand")
    use_case = _StubTrainingUseCase()
    _patch_container(monkeypatch, use_case)

    assert trainer.main() == 0
    assert use_case.configs[0].preset == "new_zealand"
    assert use_case.configs[0].bbox.min_lon == 165.0


def test_trainer_reports_domain_failure(monkeypatch) -> None:
    use_case = _StubTrainingUseCase(DomainError("not enough samples"))
    _patch_container(monkeypatch, use_case)

    assert trainer.main() == 1
