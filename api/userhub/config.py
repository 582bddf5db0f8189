import os
from typing import List
from dotenv import load_dotenv


# Load environment variables
load_dotenv()

ENV = os.environ.get("ENV", "local")

SERVICE_NAME = "Userhub API"
SERVICE_VERSION = "1.0.0"

# Local development falls back to a sqlite file next to the working directory
DATABASE_URL = os.environ.get("DATABASE_URL")
if ENV == "local" and not DATABASE_URL:
    DATABASE_URL = "sqlite:///./userhub.db"

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO" if ENV == "prod" else "DEBUG").upper()

# Appends the raw exception text to 500 responses, off unless explicitly enabled
EXPOSE_ERROR_DETAILS = os.environ.get("EXPOSE_ERROR_DETAILS", "").lower() in ("1", "true", "yes")

# bcrypt cost factor, tests run with the minimum
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))


def cors_origins() -> List[str]:
    """
    Parse CORS_ORIGINS as a comma separated list, "*" when unset.
    """
    raw = os.environ.get("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
