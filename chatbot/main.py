"""Main entry point for the studio website chatbot."""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from chatbot.config import get_settings
from chatbot.web_server import WebServer

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def main() -> None:
    """Main application entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting studio chatbot in {settings.environment.value} mode")
    logger.info(
        f"Knowledge base configured: {settings.has_notion}, "
        f"AI configured: {settings.has_ai} ({settings.llm_provider.value})"
    )

    # Validate configuration
    try:
        settings.validate_provider_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    web_server = WebServer(settings=settings)
    runner = await web_server.start()

    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await web_server.stop(runner)


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
