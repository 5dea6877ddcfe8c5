from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    cors_origins: list[str] = []
    session_duration: int = 2 * 60  # Seconds a session lives after login
    session_active_duration: int = 60  # Requests keep a session alive at least this many seconds
    password_hash_rounds: int = 10  # bcrypt work factor
    login_url: str = "/api/v1/auth/login"  # Where denied requests are sent
    cloudinary_cloud_name: str | None = None  # Image uploads are disabled when unset
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""

    model_config = {
        "env_file": [".env"],
        "env_prefix": "STOREFRONT_",
        "extra": "ignore",
    }
