"""Configuration management for the Lump-Sum Planner application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Billing
CURRENCY: Final[str] = os.getenv('CURRENCY', 'CHF')
DEFAULT_RATE: Final[int] = int(os.getenv('DEFAULT_RATE', '800'))
MAX_DURATION_MONTHS: Final[int] = int(os.getenv('MAX_DURATION_MONTHS', '60'))

# Sessions (in-memory only)
MAX_SESSIONS: Final[int] = int(os.getenv('MAX_SESSIONS', '500'))
SESSION_COOKIE: Final[str] = os.getenv('SESSION_COOKIE', 'lumpsum_session')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
EXPORT_DIR: Final[Path] = Path(os.getenv('EXPORT_DIR', '.'))
