"""Configuration management for the calendar planner."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from calplan.utilities.constants import DEFAULT_STORAGE_KEY

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Advisory (text generation) settings
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
ADVISORY_MODEL: Final[str] = os.getenv('ADVISORY_MODEL', 'gpt-4o-mini')
ADVISORY_TEMPERATURE: Final[float] = float(os.getenv('ADVISORY_TEMPERATURE', '0.7'))

# Persistence
STORAGE_KEY: Final[str] = os.getenv('STORAGE_KEY', DEFAULT_STORAGE_KEY)
AUTOSAVE_DELAY_MS: Final[int] = int(os.getenv('AUTOSAVE_DELAY_MS', '500'))
SAVED_STATUS_SECONDS: Final[float] = float(os.getenv('SAVED_STATUS_SECONDS', '2'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '127.0.0.1')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()
