from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================
    environment: str = "dev"  # "dev", "prod"
    debug: bool = True

    # ==========================================================================
    # API SECURITY
    # ==========================================================================
    api_token: str = ""  # Required in production, optional in dev
    api_token_header: str = "X-API-Key"

    # ==========================================================================
    # RATE LIMITING
    # ==========================================================================
    rate_limit_requests: int = 60  # Max requests per window
    rate_limit_window: int = 60  # Window in seconds (60 = per minute)

    # ==========================================================================
    # CORS
    # ==========================================================================
    cors_origins: str = "*"  # Comma-separated origins, or "*" for all

    # ==========================================================================
    # VERDICT THRESHOLDS (0-100 scale)
    # ==========================================================================
    fake_threshold: int = 65  # Score >= this = Likely Fake
    suspicious_threshold: int = 35  # Score >= this = Suspicious (below = Likely Real)

    # ==========================================================================
    # ANALYSIS
    # ==========================================================================
    max_combined_reasons: int = 8  # Reasons kept in the report summary
    max_input_chars: int = 20000  # Raw input is clipped to this before splitting
    default_sensitivity: float = 1.0  # UI offers 1, 2 or 3
    default_mode: str = "standard"  # Accepted and echoed, no scoring effect yet

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "prod"

    @property
    def cors_origins_list(self) -> list:
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",")]


settings = Settings()
