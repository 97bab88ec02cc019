"""
Entry point for the Recipe Assistant API.

Serves the FastAPI app with uvicorn on settings.port (PORT in the environment).
"""

import logging

import logfire
import uvicorn
from dotenv import load_dotenv

from config.settings import settings

# Load environment variables (LOGFIRE_TOKEN and friends)
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Tracing is optional; skip when there are no credentials
    try:
        logfire.configure(send_to_logfire="if-token-present", service_name="recipe-assistant")
        logfire.instrument_httpx()
        logger.info("Logfire configured")
    except Exception as e:
        logger.warning(f"Logfire setup skipped: {e}")


def main() -> None:
    configure_logging()
    if not settings.api_key_configured:
        logger.warning("OPENROUTER_API_KEY is not set; analysis and generation will fail")

    from app import app

    logger.info(f"Starting Recipe Assistant API on port {settings.port}")
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        workers=1,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
