"""
Service Configuration
"""
from typing import Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment"""

    # Application
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8787

    # MongoDB credentials
    MONGO_USER: Optional[str] = None
    MONGO_PASSWORD: Optional[str] = None

    # MongoDB target
    MONGO_SCHEME: str = "mongodb"
    MONGO_HOST: str = "localhost:27017"
    MONGO_OPTIONS: str = "retryWrites=true&w=majority"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def mongo_uri(self) -> str:
        auth = ""
        if self.MONGO_USER:
            auth = f"{quote_plus(self.MONGO_USER)}:{quote_plus(self.MONGO_PASSWORD or '')}@"
        uri = f"{self.MONGO_SCHEME}://{auth}{self.MONGO_HOST}/"
        if self.MONGO_OPTIONS:
            uri += f"?{self.MONGO_OPTIONS}"
        return uri


settings = Settings()
