from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Recipe Carbon API"
    spoonacular_api_key: str = ""
    spoonacular_base_url: str = "https://api.spoonacular.com"
    perplexity_api_key: str = ""
    highlights_model_url: str = "https://api.perplexity.ai"
    highlights_model_name: str = "sonar-pro"
    highlights_enabled: bool = True
    request_timeout_seconds: float = 15.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
