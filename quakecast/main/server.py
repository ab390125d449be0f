"""API server entry point - Main Layer."""

import uvicorn

from quakecast.main.config import get_settings


def main() -> None:
    """Serve the FastAPI application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "quakecast.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        reload=settings.service.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
