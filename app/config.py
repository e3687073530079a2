"""
Configuration settings for the thesis export backend.
Loads environment variables and provides application-wide settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:3001"

    # Front-end build served for every non-API path
    STATIC_DIR: str = "./build"

    # Request bodies carry base64 images inline
    MAX_REQUEST_SIZE: int = 50 * 1024 * 1024  # 50 MB

    # Export Configuration
    DEFAULT_TEMPLATE: str = "standard"
    EXPORT_FILENAME: str = "thesis.docx"
    INCLUDE_SECTION_GUIDES: bool = False

    # Image Configuration (pixels; converted to inches at IMAGE_DPI)
    DEFAULT_IMAGE_WIDTH: int = 600
    DEFAULT_IMAGE_HEIGHT: int = 400
    IMAGE_DPI: int = 96

    # Body paragraph layout
    FIRST_LINE_INDENT_INCHES: float = 0.5
    SECTION_SPACE_BEFORE_PT: int = 6

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into a list."""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


# Global settings instance
settings = Settings()
