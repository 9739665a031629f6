from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="TOMBOLA_")

    app_name: str = "Tombola"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./tombola.db"

    # Key of the single saved game record
    storage_key: str = "tombola-game"

    default_language: str = "en"


settings = Settings()


# =============================================================================
# CARD LIMITS
# =============================================================================

# The tabellone is always split into six cartelle
BOARD_CARD_COUNT = 6

# Player mode card count is clamped to this range
MIN_PLAYER_CARDS = 1
MAX_PLAYER_CARDS = 10
