from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    app_name: str = "Itinerary Builder"
    environment: str = "local"
    log_level: str = "INFO"

    llm_provider: str = "mock"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3"
    llm_timeout_seconds: int = 30

    # Tax defaults applied to every new authoring session
    default_cgst_percent: float = 2.5
    default_sgst_percent: float = 2.5
    default_igst_percent: float = 0.0
    default_tcs_percent: float = 0.0
    default_gst_on_total: bool = True

    default_trip_duration: int = 3
    default_adults: int = 2
    default_children: int = 0
    default_cover_image: str = (
        "https://images.unsplash.com/photo-1476514525535-07fb3b4ae5f1"
        "?q=80&w=2070&auto=format&fit=crop"
    )
    leisure_day_text: str = "Leisure day for personal exploration."


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
