"""Configuration and environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from backend directory (one level up from roofdesigner/)
load_dotenv(Path(__file__).parent.parent / ".env")

# --- API Keys ---
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")

# --- OpenRouter ---
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
REQUEST_TIMEOUT_S = float(os.getenv("REQUEST_TIMEOUT_S", "120"))

# --- Models ---
TEXT_MODEL = os.getenv("TEXT_MODEL", "google/gemini-2.5-flash")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "google/gemini-2.5-flash-image")

# --- Backend ---
BACKEND_HOST = os.getenv("BACKEND_HOST", "0.0.0.0")
BACKEND_PORT = int(os.getenv("BACKEND_PORT", "8100"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
