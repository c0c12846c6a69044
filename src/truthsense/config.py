from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_FEEDS = [
    "https://news.google.com/rss",
    "https://rss.cnn.com/rss/edition.rss",
    "https://feeds.bbci.co.uk/news/rss.xml",
    "https://www.aljazeera.com/xml/rss/all.xml",
    "https://www.reutersagency.com/feed/?best-topics=world",
    "https://www.theguardian.com/world/rss",
]


class Settings(BaseSettings):
    """Configuration sourced from environment variables."""

    service_title: str = "TruthSense Headline Checker"
    service_version: str = "1.0.0"
    service_description: str = "Rule-based fake headline detection with explanations"
    max_headline_length: int = 1000
    max_batch_size: int = 100
    rate_limit_per_minute: int = 60
    analysis_delay_seconds: float = Field(default=0.0, ge=0.0)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    feed_urls: list[str] = Field(default_factory=lambda: list(DEFAULT_FEEDS))
    feed_timeout: float = 15.0
    feed_report_path: str = "multi_rss_output.txt"
    debug: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "TRUTHSENSE_",
        "case_sensitive": False,
    }


@lru_cache(1)
def get_settings() -> Settings:
    return Settings()
