"""
Offline trainer entry point - Main Layer

Runs the nowcast training pipeline once, using ``TRAIN_*`` settings
(optionally seeded from ``TRAIN_PRESET``), and writes the model artifact and
evaluation report to the configured artifacts directory.
"""

import asyncio
import sys

from quakecast.domain.entities.errors import DomainError
from quakecast.main.config import get_settings
from quakecast.main.container import init_container
from quakecast.shared import configure_logging, get_logger, update_logging_from_settings

logger = get_logger(__name__)


def main() -> int:
    """Main entry point for the training job."""

    configure_logging()
    settings = get_settings()
    update_logging_from_settings(settings)

    container = init_container(settings)
    training_config = settings.training.to_training_config()
    use_case = container.nowcast_training_use_case()

    logger.info("trainer.starting", preset=training_config.preset)
    try:
        result = asyncio.run(use_case.execute(training_config))
    except DomainError as exc:
        logger.error("trainer.failed", error=exc.message, details=exc.details)
        return 1

    logger.info(
        "trainer.finished",
        artifact=result.artifact_location,
        evaluation=result.evaluation_location,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
