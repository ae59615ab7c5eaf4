"""
AskCart Assistant - Main entry point.
"""

import asyncio
import logging

import uvicorn

from askcart.config import settings
from askcart.server.app import create_app


# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    """Main function to run the server."""
    app = create_app(settings)

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        log_config=None,  # keep the logging configured above
    )
    server = uvicorn.Server(config)

    logger.info(f"Server is starting on {settings.host}:{settings.port} (ws: {settings.ws_path})")
    await server.serve()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
