# The module is to define the configuration settings for the agent.
# Date: 2026-10-19
# Version: 0.1.0

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional

class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the agent.
    Values are read from environment variables or a local .env file.
    Attributes:
        COPILOT_API_BASE_URL (str): Base URL of the OpenAI-compatible Copilot completion API.
        COPILOT_MODEL (str): Model name sent with every completion request.
        GITHUB_API_BASE_URL (str): Base URL of the GitHub REST API.
        GITHUB_PUBLIC_KEYS_URL (str): Endpoint listing the keys Copilot signs payloads with.
        SIGNATURE_VERIFICATION (bool): Reject requests whose payload signature does not verify.
        COPILOT_PUBLIC_KEY (Optional[str]): PEM public key; when unset the keys are fetched
            from GITHUB_PUBLIC_KEYS_URL on first use.
        REQUEST_TIMEOUT (float): Timeout in seconds for completion and GitHub calls.
        AGENT_SYSTEM_PROMPT (Optional[str]): System prompt prepended to every conversation.
            A '{login}' placeholder is replaced with the caller's GitHub login.
        HOST (str): Interface the server binds to.
        PORT (int): Port the server listens on.
    """
    # Copilot completion API
    COPILOT_API_BASE_URL: str = "https://api.githubcopilot.com"
    COPILOT_MODEL: str = "gpt-3.5-turbo"

    # GitHub
    GITHUB_API_BASE_URL: str = "https://api.github.com"
    GITHUB_PUBLIC_KEYS_URL: str = "https://api.github.com/meta/public_keys/copilot_api"

    # Payload signature
    SIGNATURE_VERIFICATION: bool = True
    COPILOT_PUBLIC_KEY: Optional[str] = None

    REQUEST_TIMEOUT: float = 60.0

    AGENT_SYSTEM_PROMPT: Optional[str] = None

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

# lru_cache to cache the settings instance.
@lru_cache
def get_settings() -> Settings:
    return Settings()
