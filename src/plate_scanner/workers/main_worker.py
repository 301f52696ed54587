import logging

import uvicorn

from plate_scanner.core.config import settings
from plate_scanner.monitoring.metrics import start_metrics_server

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    start_metrics_server(port=settings.metrics_port)

    logger.info(f"🚀 {settings.app_name} iniciado en {settings.app_host}:{settings.app_port}")
    try:
        uvicorn.run(
            "plate_scanner.api.main:create_app",
            factory=True,
            host=settings.app_host,
            port=settings.app_port,
            log_config=None,
        )
    except KeyboardInterrupt:
        logger.info("🧠 Deteniendo…")


if __name__ == "__main__":
    main()
