# src/config.py
"""Application configuration using pydantic-settings.

Provides a centralized Settings class for all environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FULL_PROCESSORS = "tokenize,mwt,pos,lemma,ner,constituency,depparse,coref"
DEFAULT_NER_PROCESSORS = "tokenize,ner"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file and environment variables.
    Environment variables take precedence over .env file values.
    """

    # Slack Integration
    slack_bot_token: str = ""
    slack_app_token: str = ""

    # NLP pipeline (stanza)
    nlp_language: str = "en"
    nlp_full_processors: str = DEFAULT_FULL_PROCESSORS
    nlp_ner_processors: str = DEFAULT_NER_PROCESSORS
    nlp_annotation_timeout: float = 60.0  # Seconds per annotation call
    nlp_use_gpu: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Observability
    logfire_token: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        case_sensitive=False,  # Allow case-insensitive env var names
    )

    @property
    def use_json_logs(self) -> bool:
        """Whether log output should be structured JSON.

        Returns:
            True when LOG_FORMAT is "json" (case-insensitive).
        """
        return self.log_format.strip().lower() == "json"


# Singleton instance - import this in your code
settings = Settings()
