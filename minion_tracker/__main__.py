"""Run the minion tracker with uvicorn: ``python -m minion_tracker``."""

from minion_tracker.core.config import settings
from minion_tracker.core.logging_config import get_logger

logger = get_logger(__name__)


def main() -> None:
    logger.info(f"Starting minion tracker on {settings.HOST}:{settings.PORT}")
    import uvicorn

    uvicorn.run(
        "minion_tracker.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    main()
