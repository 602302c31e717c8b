# /classboard-backend/classboard/core/config.py

"""
Central configuration for the Classboard backend.

Every setting is read from the environment (a local `.env` file is honoured
through python-dotenv) so the same code runs against SQLite on a laptop and
PostgreSQL plus R2 object storage in production.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./classboard.db")

# --- Blob Storage ---
# "local" keeps photo bytes on disk under UPLOADS_DIR; "r2" uses S3-compatible storage.
BLOB_BACKEND = os.getenv("BLOB_BACKEND", "local").lower()
UPLOADS_DIR = os.getenv("UPLOADS_DIR", "board_uploads")
UPLOADS_BASE_URL = os.getenv("UPLOADS_BASE_URL", "/uploads")

R2_BUCKET_NAME = os.getenv("R2_BUCKET_NAME")
R2_ACCOUNT_ID = os.getenv("R2_ACCOUNT_ID")
R2_ACCESS_KEY_ID = os.getenv("R2_ACCESS_KEY_ID")
R2_SECRET_ACCESS_KEY = os.getenv("R2_SECRET_ACCESS_KEY")
R2_PUBLIC_DOMAIN = os.getenv("R2_PUBLIC_DOMAIN")

# --- Domain Limits ---
MAX_PHOTO_BYTES = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))
MAX_SESSION_DURATION_SECONDS = 3600.0
MIN_PASSWORD_LENGTH = 6
# Upper bound on the number of ids in a single "IN" query against the view log.
VIEW_QUERY_BATCH_SIZE = 10
RECENT_ACTIVITY_LIMIT = 20

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
