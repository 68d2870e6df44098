import os
from dotenv import load_dotenv

# Values already present in the environment win over .env
load_dotenv()


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


DATABASE_URL = os.environ.get("DATABASE_URL")

if not DATABASE_URL:
    raise ValueError("DATABASE_URL is not set. Please check your .env file.")

SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() in ("1", "true", "yes")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = _split(os.environ.get("CORS_ORIGINS", "*"))

# Room names inserted on startup when the rooms table is empty
SEED_ROOMS = _split(os.environ.get("SEED_ROOMS", ""))
