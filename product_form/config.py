# product_form/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from functools import lru_cache


class Settings(BaseSettings):
    ENV: str = "development"

    # where the dashboard posts new products
    API_BASE_URL: str = "http://localhost:3000"
    CREATE_PRODUCT_PATH: str = "/api/createProduct"
    REQUEST_TIMEOUT: float = 10.0

    # sent as `image` when nothing was uploaded
    PLACEHOLDER_IMAGE: str = "random.jpg"
    # advisory only (shown as "Max. 2MB" in the upload box), never enforced
    MAX_IMAGE_BYTES: int = 2 * 1024 * 1024

    # local createProduct endpoint storage
    DATA_DIR: Path = Path("data")
    PRODUCTS_FILE: str = "products.csv"

    # comma separated, e.g. CORS_ORIGINS=http://localhost:3000,https://admin.example.com
    CORS_ORIGINS: str = ""

    # Example .env:
    # API_BASE_URL=https://shop.example.com
    # PLACEHOLDER_IMAGE=random.jpg

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance."""
    return Settings()


settings = Settings()
