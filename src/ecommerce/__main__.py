"""Run one service process: ``SERVICE_NAME=products python -m ecommerce``."""

import uvicorn

from ecommerce.api.app import create_app
from ecommerce.config import get_settings
from ecommerce.logging import configure_logging, get_logger


def main() -> None:
    settings = get_settings()
    configure_logging(settings.service_name, settings.log_level, settings.environment)

    logger = get_logger(__name__)
    logger.info(
        "starting_service",
        port=settings.port,
        environment=settings.environment,
        postgres_host=settings.postgres_host,
        redis_addr=settings.redis_addr,
    )

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
