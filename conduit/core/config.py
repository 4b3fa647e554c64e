"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, with no scattered magic strings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the content store.
        database_echo: Echo SQL statements to the log.
        jwt_secret_key: Secret used to sign session tokens.
        jwt_algorithm: JWS algorithm for session tokens.
        access_token_expire_minutes: Lifetime of an issued session token.
        bcrypt_rounds: Cost factor for password hashing.
        default_page_size: Article page size when no limit is given.
        max_page_size: Upper bound accepted for the limit parameter.
        rate_limit_default: Default rate limit for all endpoints.
        rate_limit_auth: Rate limit for sign-up and sign-in.
        cors_origins: Origins allowed to call the API from a browser.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Conduit"
    debug: bool = False
    log_level: str = "INFO"

    database_url: str = "sqlite:///./conduit.db"
    database_echo: bool = False

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    bcrypt_rounds: int = 12

    default_page_size: int = 20
    max_page_size: int = 100

    rate_limit_default: str = "120/minute"
    rate_limit_auth: str = "10/minute"
    cors_origins: list[str] = ["*"]


settings = Settings()
