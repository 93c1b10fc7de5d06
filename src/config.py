"""
Runtime configuration for the +Cura planner.
Values come from the environment (optionally a .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Resolve project root: go up from src/ to project root
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

DATABASE_URL = os.getenv(
    "PLANNER_DATABASE_URL",
    f"sqlite:///{os.path.join(PROJECT_ROOT, 'planner.db')}",
)

OLLAMA_HOST = os.getenv("OLLAMA_HOST", "http://localhost:11434")
INSIGHT_MODEL = os.getenv("INSIGHT_MODEL", "auto")
INSIGHT_TIMEOUT = float(os.getenv("INSIGHT_TIMEOUT", "15"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
