from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "FLEETOPS_", "env_file": ".env", "env_file_encoding": "utf-8"}

    jwt_secret: str = Field(min_length=32)
    log_level: str = Field(default="INFO")
    cors_origins: str = Field(default="http://localhost:5173")

    backend_base_url: str = Field(default="http://localhost:8080/api")
    backend_timeout_seconds: float = Field(default=30.0, gt=0)

    # Geocoding is disabled when no key is configured
    amap_key: str = Field(default="")
    amap_base_url: str = Field(default="https://restapi.amap.com")
    geocode_city: str = Field(default="全国")
    geocode_timeout_seconds: float = Field(default=5.0, gt=0)
    geocode_concurrency: int = Field(default=8, ge=1)

    submit_concurrency: int = Field(default=8, ge=1, le=64)
    default_user_password: str = Field(default="123456", min_length=6)
    list_cache_ttl_seconds: float = Field(default=60.0, ge=0)


settings = Settings()
