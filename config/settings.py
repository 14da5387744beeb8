from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Birdeye Data Services API (token overview, metadata, security, holders)
    birdeye_api_key: str = ""
    birdeye_max_rps: float = 15.0  # Starter plan = 15 RPS
    birdeye_timeout_sec: float = 15.0

    # Whole refresh (all provider calls) must finish within this budget
    analytics_timeout_sec: float = 5.0

    # Synthetic price series
    series_points: int = 24  # hourly samples
    series_span_hours: int = 24
    series_noise_pct: float = 0.01  # +/-1% multiplicative jitter
    series_price_floor: float = 0.0001

    # Holder distribution
    top_holders_limit: int = 10

    # Wrapped SOL always renders with the canonical token-list logo
    native_mint: str = "So11111111111111111111111111111111111111112"
    native_logo_uri: str = (
        "https://raw.githubusercontent.com/solana-labs/token-list/main/assets/"
        "mainnet/So11111111111111111111111111111111111111112/logo.png"
    )


settings = Settings()
