import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file
load_dotenv('.env')


def get_env(name: str, default: Optional[str] = None) -> str:
    val = os.getenv(name, default)
    if val is None:
        raise RuntimeError(f"Missing required env var: {name}")
    return val


def build_postgres_url() -> str:
    """Assemble a PostgreSQL URL from the POSTGRES_* variables."""
    user = get_env("POSTGRES_USER", "postgres")
    password = get_env("POSTGRES_PASSWORD", "postgres")
    host = get_env("POSTGRES_HOST", "localhost")
    port = get_env("POSTGRES_PORT", "5432")
    db = get_env("POSTGRES_DB", "orders")
    return f"postgresql://{user}:{password}@{host}:{port}/{db}"


class Settings:
    def __init__(self):
        self.APP_NAME: str = get_env("APP_NAME", "Orders Service")
        self.APP_VERSION: str = get_env("APP_VERSION", "1.0.0")

        self.DEBUG: bool = get_env("DEBUG", "False").lower() == "true"
        self.TESTING: bool = get_env("TESTING", "False").lower() == "true"

        # Database configuration - switch based on environment
        if self.TESTING:
            # In-memory SQLite for testing
            self.DATABASE_URL: str = "sqlite:///:memory:"
            self.SQLALCHEMY_ECHO: bool = False
        elif self.DEBUG:
            # File-based SQLite for development
            self.DATABASE_URL: str = get_env("DATABASE_URL", "sqlite:///./orders.sqlite3")
            self.SQLALCHEMY_ECHO: bool = True
        else:
            # PostgreSQL for production
            self.DATABASE_URL: str = os.getenv("POSTGRES_DATABASE_URL") or build_postgres_url()
            self.SQLALCHEMY_ECHO: bool = False

        self.LOG_LEVEL: str = get_env("LOG_LEVEL", "WARNING").upper()
        default_auto_migrate = "True" if (self.TESTING or self.DEBUG) else "False"
        self.AUTO_MIGRATE: bool = get_env("AUTO_MIGRATE", default_auto_migrate).lower() == "true"
        self.PORT: int = int(get_env("PORT", "8000"))


settings = Settings()
