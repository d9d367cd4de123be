from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "CardBinder"
    debug: bool = False

    database_url: str = "postgresql+asyncpg://localhost:5432/cardbinder"

    # Uploaded card photos are written here and served under image_base_url
    image_dir: str = "data/images"
    image_base_url: str = "/images"
    max_image_bytes: int = 10 * 1024 * 1024


settings = Settings()
