"""Application settings loaded from environment variables / .env file."""
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parents[1]
STATIC_DIR = Path(__file__).resolve().parent / "static"

# ── Database ─────────────────────────────────────────────────────────────
DB_PATH: Path = Path(os.getenv("HOSPITAL_DB_PATH", str(PROJECT_ROOT / "data" / "hospital.db")))
SQL_ECHO: bool = os.getenv("HOSPITAL_SQL_ECHO", "false").lower() in ("1", "true", "yes")

# ── Server ───────────────────────────────────────────────────────────────
HOST: str = os.getenv("HOSPITAL_HOST", "0.0.0.0")
PORT: int = int(os.getenv("HOSPITAL_PORT", "8080"))

# ── Logging ──────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("HOSPITAL_LOG_LEVEL", "INFO").upper()
