import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Flask application configuration."""

    # Flask core
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-key-change-in-production')

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # CORS origins for /api routes
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')

    # Calculation defaults
    DEFAULT_MACHINE_PRESET = os.environ.get('DEFAULT_MACHINE_PRESET', 'standard_rear')
    MAX_PROFILE_POINTS = int(os.environ.get('MAX_PROFILE_POINTS', 500))
