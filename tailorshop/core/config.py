"""
Application settings
"""
from datetime import date
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Tailor Shop Order API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = ["*"]

    # Database
    DATABASE_URL: str = Field(
        default="sqlite:///./orders.db",
        description="SQLAlchemy URL of the order store"
    )

    # Style image uploads
    UPLOAD_DIR: str = Field(default="uploads", description="Directory holding stored style images")
    UPLOAD_URL_PATH: str = Field(default="/uploads", description="URL prefix the images are served under")

    # Stand-ins for an open range on the pending orders query
    PENDING_RANGE_START: date = date(2000, 1, 1)
    PENDING_RANGE_END: date = date(2100, 1, 1)

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()
