from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # App config
    app_name: str = "Customer CRUD Service"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 9999

    # Logging
    log_level: str = "INFO"
    log_format: str = "default"
    log_config_path: Optional[str] = None

    # Database
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "bankdb"
    postgres_user: str = "postgres"
    postgres_password: str = "password"
    db_pool_min_size: int = 5
    db_pool_max_size: int = 20
    db_command_timeout: float = 5.0

    # Credentials and customer tokens
    bcrypt_rounds: int = 10
    token_bytes: int = 256
    token_ttl_seconds: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator('bcrypt_rounds')
    @classmethod
    def validate_bcrypt_rounds(cls, v):
        if not 4 <= v <= 31:
            raise ValueError('BCRYPT_ROUNDS must be between 4 and 31')
        return v

    @field_validator('token_bytes', 'token_ttl_seconds')
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError('value must be positive')
        return v

    @property
    def dsn(self) -> str:
        """Build PostgreSQL connection string"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    def log_config(self):
        """Log configuration (without sensitive data)"""
        logger.info(f"Database: {self.postgres_host}:{self.postgres_port}/{self.postgres_db}")
        logger.info(f"Pool Size: {self.db_pool_min_size}-{self.db_pool_max_size}, "
                    f"Command Timeout: {self.db_command_timeout}s")
        logger.info(f"Token TTL: {self.token_ttl_seconds}s, Token Bytes: {self.token_bytes}")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
