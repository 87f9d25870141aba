from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "coders-dungeon-api"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3001

    GITHUB_TOKEN: str | None = None
    GITHUB_API_BASE: str = "https://api.github.com"
    GITHUB_TIMEOUT_SECONDS: float = 30.0
    CACHE_TTL_SECONDS: int = 30 * 60

    GEMINI_API_KEY: str | None = None
    GEMINI_CHAT_MODEL: str = "gemini-2.0-flash"
    DESCRIBE_FILE_CHARS: int = 1000
    DESCRIBE_SNIPPET_CHARS: int = 500

    TREE_MAX_DEPTH: int = 12
    TREE_MAX_NODES: int = 2000

    CORS_ORIGINS: list[str] = ["*"]

    # where the console client finds the API
    API_BASE_URL: str = "http://localhost:3001"

settings = Settings()
