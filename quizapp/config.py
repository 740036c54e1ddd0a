"""
Configuration module for the application.
All configuration values are read from environment variables
(a .env file is loaded by the application factory).
"""
import os
import secrets
import warnings


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "")
        self.DB_PORT: str = os.getenv("DB_PORT", "")
        self.DB_NAME: str = os.getenv("DB_NAME", "")

        # API Configuration
        self.API_PREFIX: str = os.getenv("API_PREFIX", "/api")

        # Logging
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # SQLAlchemy Configuration
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        sqlalchemy_echo = os.getenv("SQLALCHEMY_ECHO", "")
        self.SQLALCHEMY_ECHO: bool = sqlalchemy_echo.lower() == "true" if sqlalchemy_echo else False

        # Security Configuration
        session_secure = os.getenv("SESSION_COOKIE_SECURE", "")
        self.SESSION_COOKIE_SECURE: bool = session_secure.lower() == "true" if session_secure else False

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Database URI: DATABASE_URL if set, otherwise built from the DB_* variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def is_mysql(self) -> bool:
        return self.SQLALCHEMY_DATABASE_URI.startswith("mysql")

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces SECRET_KEY in production environment.
        """
        if not self.SECRET_KEY:
            if self.FLASK_ENV == "production":
                raise ValueError(
                    "SECRET_KEY environment variable is required in production. "
                    "Set it in your .env file or environment variables."
                )
        if not self.API_PREFIX.startswith("/"):
            raise ValueError("API_PREFIX must start with '/'")


# Global config instance - re-initialized by create_app() after load_dotenv()
config = Config()
