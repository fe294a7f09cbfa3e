import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class UserConfig(BaseModel):
    username: str
    password: str


class Settings(BaseSettings):
    LISTEN_HOST: str = "0.0.0.0"
    LISTEN_PORT: int = 80

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DATABASE: str = "myday"
    MONGO_COLLECTION: str = "Ratings"
    MONGO_USERNAME: Optional[str] = None
    MONGO_PASSWORD: Optional[str] = None
    MONGO_APP_NAME: str = "myday-service"
    MONGO_CONNECT_TIMEOUT: float = 10  # seconds
    MONGO_OPERATION_TIMEOUT: float = 5  # seconds

    # Basic auth users, JSON list of {"username": ..., "password": ...}
    USER_CONFIGS: List[UserConfig] = []

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_MAX_FILE_SIZE: int = 10485760  # 10MB in bytes
    LOG_BACKUP_COUNT: int = 5
    LOG_COLORS: str = "true"

    # Environment
    ENVIRONMENT: str = "dev"

    class Config:
        env_file = (".env", f".env.{os.getenv('ENVIRONMENT', 'dev')}")


@lru_cache
def get_settings() -> Settings:
    return Settings()
