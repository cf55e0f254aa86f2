"""Application settings using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings
from typing import Optional


class PowerballSettings(BaseSettings):
    """Application settings, overridable through environment variables or .env."""

    # ========================================
    # ANALYSIS CONFIGURATION
    # ========================================
    hot_primary_count: int = 10
    cold_primary_count: int = 10
    hot_bonus_count: int = 5
    cold_bonus_count: int = 5
    pair_count: int = 10
    overdue_count: int = 10

    # ========================================
    # PREDICTION CONFIGURATION
    # ========================================
    default_prediction_count: int = 10
    max_prediction_count: int = 100
    random_seed: Optional[int] = None

    # Weighting heuristics (multipliers stack when a number is in several lists)
    floor_weight: float = 0.1
    hot_boost: float = 1.5
    cold_boost: float = 1.2
    overdue_boost: float = 1.3
    hot_bonus_boost: float = 1.5
    cold_bonus_boost: float = 1.2
    pair_inclusion_probability: float = 0.4
    parity_boost: float = 1.5
    parity_penalty: float = 0.1

    # ========================================
    # API CONFIGURATION
    # ========================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False
    cors_origins: Optional[str] = "*"
    rate_limit_enabled: bool = True
    rate_limit_requests_per_minute: int = 60

    # ========================================
    # SCRAPING CONFIGURATION
    # ========================================
    scraping_base_url: str = "https://www.powerball.com/previous-results"
    scraping_user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    scraping_timeout: int = 30
    scraping_retry_attempts: int = 3
    scraping_request_delay: float = 0.3
    scraping_chunk_delay: float = 0.5
    scraping_max_pages: int = 50
    scraping_chunk_days: int = 90
    scraping_lookback_days: int = 30

    # Local dataset used when the live source returns nothing
    fallback_data_file: Optional[str] = None

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================
    log_level: str = "INFO"
    log_format: str = "text"

    model_config = {
        "env_file": ".env",
        "env_prefix": "POWERBALL_",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = PowerballSettings()
