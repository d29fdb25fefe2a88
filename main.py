import logging
import sys

import uvicorn

from src.config import ConfigurationError, get_config

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        config = get_config()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(str(e))
        sys.exit(1)

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logger.info(f"Starting Tienda API on port {config.server.port}")
    # uvicorn exits the process when the lifespan startup fails
    uvicorn.run("src.api:app", host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
