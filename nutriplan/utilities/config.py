"""Configuration management for the Nutriplan application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# AI Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
TEXT_MODEL: Final[str] = os.getenv('NUTRIPLAN_TEXT_MODEL', 'gpt-4o-mini')
IMAGE_MODEL: Final[str] = os.getenv('NUTRIPLAN_IMAGE_MODEL', 'gpt-image-1')
AI_TIMEOUT: Final[float] = float(os.getenv('NUTRIPLAN_AI_TIMEOUT', '60'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Image enrichment fan-out (one request per meal slot of a day)
IMAGE_WORKERS: Final[int] = int(os.getenv('NUTRIPLAN_IMAGE_WORKERS', '5'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('NUTRIPLAN_DATA_DIR', str(BASE_DIR / 'data')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
