import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DATABASE_PATH = os.getenv("DATABASE_PATH", "../data/herbtrace.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Daily log files; defaults to logs/ at the project root
LOG_DIR = os.getenv("LOG_DIR", str(Path(__file__).resolve().parents[2] / "logs"))

# Identity that owns the zone registry and every ledger on first initialization
INITIAL_AUTHORITY = os.getenv("INITIAL_AUTHORITY", "deployer")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

# Number of notifications kept in memory for /api/events
EVENT_HISTORY_SIZE = int(os.getenv("EVENT_HISTORY_SIZE", "500"))
