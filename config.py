import logging
import os

from dotenv import load_dotenv

load_dotenv()

DB_FILE = os.path.join(os.path.dirname(__file__), "fleet.db")
_default_url = f"sqlite:///{DB_FILE}"
DATABASE_URL = os.environ.get("DATABASE_URL", _default_url).strip()

# Hosted Postgres hands out postgresql://; SQLAlchemy needs the psycopg driver spelled out
if DATABASE_URL.startswith("postgresql://"):
    DATABASE_URL = DATABASE_URL.replace("postgresql://", "postgresql+psycopg://", 1)

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))
DEBUG = os.environ.get("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

VEHICLE_RATE_LIMIT = int(os.environ.get("VEHICLE_RATE_LIMIT", "3"))
VEHICLE_RATE_WINDOW_SECONDS = float(os.environ.get("VEHICLE_RATE_WINDOW_SECONDS", "60"))


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
