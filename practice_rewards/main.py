"""Main entry point for the rewards API"""
import logging
import uvicorn

from practice_rewards.api.server import create_api_application
from practice_rewards.config import API_HOST, API_PORT, LOG_LEVEL

logger = logging.getLogger(__name__)

app = create_api_application()


def main() -> None:
    """Run the API with uvicorn"""
    logger.info(f"Serving rewards API on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
