"""OMDb API configuration settings.

REST API used to resolve catalog titles to critic and audience ratings.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OMDbSettings(BaseSettings):
    """OMDb API configuration.

    Attributes:
        api_key: Default OMDb API key (optional, the credential store wins).
        base_url: OMDb API base URL.
        timeout: Request timeout in seconds. None waits indefinitely.
        max_retries: Attempts per lookup on transport failures.
        user_agent: HTTP User-Agent for requests.
    """

    api_key: str = Field(default="", alias="OMDB_API_KEY")
    base_url: str = Field(default="https://www.omdbapi.com/", alias="OMDB_BASE_URL")
    timeout: float | None = Field(default=None, alias="OMDB_TIMEOUT")
    max_retries: int = Field(default=1, alias="OMDB_MAX_RETRIES")
    user_agent: str = Field(
        default="StreamRatings/1.0 (+https://www.omdbapi.com)",
        alias="OMDB_USER_AGENT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if an OMDb API key is configured."""
        return bool(self.api_key and self.api_key != "your_api_key_here")

    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """At least one attempt is always made."""
        if v < 1:
            raise ValueError("OMDB_MAX_RETRIES must be >= 1")
        return v
