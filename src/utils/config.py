"""
Configuration management for the editorial content repository.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when required configuration is missing."""
    pass


class Config:
    """Configuration class for application settings."""

    # Substrate backend: redis, file or memory
    SUBSTRATE = os.getenv('SUBSTRATE', 'redis').lower()

    # Redis Configuration
    REDIS_HOST = os.getenv('REDIS_HOST')
    REDIS_PORT = int(os.getenv('REDIS_PORT')) if os.getenv('REDIS_PORT') else None
    REDIS_DB = int(os.getenv('REDIS_DB')) if os.getenv('REDIS_DB') else None
    KEY_PREFIX = os.getenv('KEY_PREFIX', '')

    # File substrate path
    DATA_FILE_PATH = os.getenv('DATA_FILE_PATH') or os.path.join(
        os.path.dirname(os.path.dirname(os.path.dirname(__file__))),
        'data',
        'store.json'
    )

    # Built-in administrator
    ADMIN_NAME = os.getenv('ADMIN_NAME', 'Administrador')
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin@engipec.com.br')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin123')

    # Employee avatars
    AVATAR_BASE_URL = os.getenv('AVATAR_BASE_URL', 'https://api.dicebear.com/7.x/avatars/svg')

    # Articles only live for the process lifetime unless enabled
    PERSIST_ARTICLES = os.getenv('PERSIST_ARTICLES', 'false').lower() == 'true'

    SUBSTRATES = ('redis', 'file', 'memory')

    @classmethod
    def validate(cls):
        """
        Validate that all required configuration values are set.

        Raises:
            ConfigurationError: If required configuration is missing
        """
        if cls.SUBSTRATE not in cls.SUBSTRATES:
            raise ConfigurationError(
                f"Unknown SUBSTRATE '{cls.SUBSTRATE}'. "
                f"Expected one of: {', '.join(cls.SUBSTRATES)}."
            )

        required_vars = {
            'ADMIN_EMAIL': cls.ADMIN_EMAIL,
            'ADMIN_PASSWORD': cls.ADMIN_PASSWORD,
        }
        if cls.SUBSTRATE == 'redis':
            required_vars.update({
                'REDIS_HOST': cls.REDIS_HOST,
                'REDIS_PORT': cls.REDIS_PORT,
                'REDIS_DB': cls.REDIS_DB,
            })
        elif cls.SUBSTRATE == 'file':
            required_vars['DATA_FILE_PATH'] = cls.DATA_FILE_PATH

        missing = [var for var, value in required_vars.items() if value is None]

        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                f"Please check your .env file."
            )
