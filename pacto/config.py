from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PACTO_", env_file=".env", extra="ignore")

    data_file: str = "/tmp/pacto-data.json"
    static_dir: str = "public"

    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    cors_origins: list[str] = ["*"]


settings = Settings()
