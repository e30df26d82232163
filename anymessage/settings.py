# anymessage/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# This settings.py file is at <project root>/anymessage/settings.py
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    logger.info(f"SETTINGS.PY: .env file found at: {DOTENV_PATH}")
else:
    logger.info(
        f"SETTINGS.PY: .env file not found at: {DOTENV_PATH}. "
        "Will rely on OS env vars or defaults."
    )


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    app_name: str = "AnyMessage API"
    debug_mode: bool = False

    # SQLite configuration
    sqlite_db_path: str = "./anymessage_data.sqlite3"

    # Origin label that maps to the default (root) site rather than a team
    reserved_subdomain: str = "www"

    # User authentication
    host_app_registration_secret: Optional[str] = None
    user_auth_token_bytes_length: int = 32

    # Integration credentials are stored Fernet-encrypted
    encryption_key: Optional[str] = Field(
        default=None,
        description="Fernet key for encrypting integration credentials. MUST be set for production."
    )

    # Billing
    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key used for subscription status checks."
    )

    model_config = SettingsConfigDict(
        env_file=DOTENV_PATH if DOTENV_PATH.exists() else None,
        extra="ignore",
        env_file_encoding='utf-8'
    )


settings = Settings()

# Sensitive values are masked
logger.info(
    f"SETTINGS.PY: debug_mode={settings.debug_mode}, "
    f"sqlite_db_path='{settings.sqlite_db_path}', "
    f"reserved_subdomain='{settings.reserved_subdomain}'"
)
logger.info(
    f"SETTINGS.PY: host_app_registration_secret="
    f"{'********' if settings.host_app_registration_secret else 'None'}, "
    f"encryption_key={'********' if settings.encryption_key else 'None'}, "
    f"stripe_secret_key={'********' if settings.stripe_secret_key else 'None'}"
)
