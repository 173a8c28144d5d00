"""Configuration constants for backend."""

import logging
import os

from dotenv import load_dotenv

# Optional: set via environment or .env
load_dotenv()

MONGO_URL = os.environ.get("MONGO_URL", "mongodb://localhost:27017")
MONGO_DB = os.environ.get("MONGO_DB", "property_listings")
PROPERTY_COLLECTION = "properties"
USER_COLLECTION = "users"

API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:3000")
PROPERTY_ENDPOINT = os.environ.get("PROPERTY_ENDPOINT", "/api/v1/property")
FRONTEND_ORIGIN = os.environ.get("FRONTEND_ORIGIN", "http://localhost:8501")
# no timeout unless configured
FETCH_TIMEOUT = float(os.environ["FETCH_TIMEOUT"]) if os.environ.get("FETCH_TIMEOUT") else None

PORT = int(os.environ.get("PORT", 3000))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

ITEMS_PER_PAGE = 9
BCRYPT_ROUNDS = 10


def property_url() -> str:
    return API_BASE_URL.rstrip("/") + PROPERTY_ENDPOINT


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
