"""Application configuration."""

import os
from dataclasses import dataclass

import dotenv

from .llm.client import DEFAULT_API_URL
from .llm.types import GenerationDefaults

dotenv.load_dotenv()


@dataclass
class AppSettings:
    """Main application settings with environment variable overrides."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Upstream chat API
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    model: str = "deepseek-v3.2"
    temperature: float = 0.8
    max_tokens: int = 1024

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        return cls(
            host=os.getenv("APP_HOST", cls.host),
            port=int(os.getenv("APP_PORT", cls.port)),
            api_url=os.getenv("CHAT_API_URL", cls.api_url),
            api_key=os.getenv("CHAT_API_KEY", cls.api_key),
            model=os.getenv("CHAT_MODEL", cls.model),
            temperature=float(os.getenv("CHAT_TEMPERATURE", cls.temperature)),
            max_tokens=int(os.getenv("CHAT_MAX_TOKENS", cls.max_tokens)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )

    def generation_defaults(self) -> GenerationDefaults:
        return GenerationDefaults(
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )


settings = AppSettings.from_env()
