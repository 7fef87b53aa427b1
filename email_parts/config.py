"""
Settings read from the environment.

Importing the library never reads a .env file; applications (and
scripts/render_part.py) call dotenv.load_dotenv() before importing this module.
"""
import os


# --- Byte sources ---
CHUNK_SIZE: int = int(os.getenv("EMAIL_PARTS_CHUNK_SIZE", "8192"))
SPOOL_MAX_SIZE: int = int(os.getenv("EMAIL_PARTS_SPOOL_MAX_SIZE", str(1024 * 1024)))

# --- Encoding ---
MAX_LINE_LENGTH: int = int(os.getenv("EMAIL_PARTS_MAX_LINE_LENGTH", "76"))
DEFAULT_CHARSET: str = os.getenv("EMAIL_PARTS_DEFAULT_CHARSET", "utf-8")

# --- Logging ---
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
