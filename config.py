from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    catalog_api_base_url: str = Field("https://api.escuelajs.co/api/v1")
    # None means requests waits indefinitely, matching the single-attempt contract
    request_timeout: Optional[float] = None

    default_page_size: int = 10
    page_size_options: List[int] = Field(default_factory=lambda: [5, 10, 25, 50])

    placeholder_image_url: str = "https://via.placeholder.com/300?text=No+Image"
    thumbnail_placeholder_url: str = "https://via.placeholder.com/60?text=No+Image"

    load_on_startup: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
