"""
Application Configuration
Settings read from the environment (and a local .env file).
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Data Source Configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./winmix.db")
# CSV/JSON file of historical matches; used instead of the database when set
MATCHES_FILE: Optional[str] = os.getenv("MATCHES_FILE") or None

# Prediction cache
PREDICTION_CACHE_TTL = int(os.getenv("PREDICTION_CACHE_TTL", "300"))

# Redis
REDIS_ENABLED = os.getenv("REDIS_ENABLED", "false").lower() == "true"
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD") or None

# API
CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
PORT = int(os.getenv("PORT", "8000"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Europe/Budapest")
