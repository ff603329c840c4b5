# /engagement_api/config.py

import os

from dotenv import load_dotenv

# Load a local .env before anything reads the environment.
load_dotenv()

# The second argument is a default value for local development.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./engagement.db")

# Comma-separated allowed origins, e.g. http://localhost:8080,https://app.example.com
raw_origins = os.getenv("CORS_ORIGINS", "http://localhost:8080")
CORS_ORIGINS = [o.strip() for o in raw_origins.split(",") if o.strip()]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "100"))
