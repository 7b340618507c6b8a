from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings"""
    api_host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    api_prefix: str = "/api"
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Store settings
    store_backend: str = "sql"
    database_url: str = "sqlite:///./blog.db"
    database_key: Optional[str] = None
    database_echo: bool = False
    store_timeout_seconds: float = 5.0

    # Password hashing
    bcrypt_rounds: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
