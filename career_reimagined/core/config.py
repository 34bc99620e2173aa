from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None

    OPENAI_MODEL_CLASSIFY: str = "gpt-4o-mini"
    OPENAI_MODEL_IMAGE: str = "gpt-4.1-mini"
    OPENAI_MODEL_PLAN: str = "gpt-4o-mini"

    OPENAI_TEMPERATURE_CLASSIFY: float = 0.0
    OPENAI_TEMPERATURE_PLAN: float = 0.7
    OPENAI_TIMEOUT_SECONDS: float = 120.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024


settings = Settings()
