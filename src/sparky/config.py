import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

# --- SWITCH PROVIDER HERE --- gemini | openai | claude
ACTIVE_PROVIDER = os.getenv("AI_PROVIDER", "gemini").strip().lower()

# Default model per provider
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-3-sonnet")

# Single credential shared by every provider
API_KEY_ENV = "API_KEY"

FALLBACK_MODEL = "gemini-2.5-flash"
STREAM_MODEL = "gemini-flash-lite-latest"

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper()

# === CONFIGURATION === Tutor
TUTOR_NAME = "Sparky"
WEAK_AREA_THRESHOLD = 75
TIMESTAMP_FORMAT = "%H:%M"
