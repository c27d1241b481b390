from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "ShelfPicker"
    debug: bool = False

    bgg_base_url: str = "https://boardgamegeek.com/xmlapi2"

    # Sent as a bearer token when calling BGG directly. Leave empty when
    # requests go through a proxy that injects the credential.
    bgg_api_token: str = ""

    bgg_user_agent: str = "ShelfPicker/1.0"
    bgg_request_timeout: float = 30.0

    # Retry ceiling and first backoff interval (doubles on each retry)
    bgg_max_retries: int = 5
    bgg_initial_retry_delay: float = 2.0

    # /thing accepts at most 20 ids per call with stats=1
    bgg_batch_size: int = 20

    # Pause between consecutive batch/page requests (rate-limit courtesy)
    bgg_courtesy_delay: float = 0.5

    bgg_plays_page_size: int = 100

    # Backoff hint returned with "still processing" failures
    bgg_processing_backoff: float = 2.0

    # Cache lifetimes in seconds
    cache_ttl_user: float = 5 * 60
    cache_ttl_collection: float = 10 * 60
    cache_ttl_game_details: float = 60 * 60
    cache_ttl_plays: float = 5 * 60


settings = Settings()
