"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    gemini_api_key: str = ""
    llm_default_model: str = "gemini/gemini-2.5-flash"
    llm_temperature: float = 0.7
    auth_username: str = ""
    auth_password: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
