"""
API configuration from environment variables.

Variables (optionally from a .env file):
    CORS_ORIGINS: Comma separated list of allowed origins
    PROJECTION_YEARS_MAX: Longest horizon a request may ask for
    VERCEL: Set on serverless deployments
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:3001,http://localhost:5173"


class ApiConfig:
    """API configuration from environment variables."""

    def __init__(self):
        self.cors_origins = [
            o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()
        ]
        self.max_horizon_years = int(os.getenv("PROJECTION_YEARS_MAX", "50"))
        self.is_serverless = bool(os.getenv("VERCEL"))


def get_config() -> ApiConfig:
    """FastAPI dependency; re-reads the environment so tests can override it."""
    return ApiConfig()
