import threading

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.passwordless.dev/"


def normalize_api_url(value: str) -> str:
    """Strip surrounding whitespace and make sure the URL ends with a slash."""
    value = value.strip()
    if not value:
        raise ValueError("api_url must not be empty")
    if not value.endswith("/"):
        value += "/"
    return value


class Settings(BaseSettings):
    api_url: str = DEFAULT_API_URL
    api_secret: SecretStr | None = None

    # PASSWORDLESS_API_URL / PASSWORDLESS_API_SECRET
    model_config = SettingsConfigDict(
        env_prefix="PASSWORDLESS_", env_file=".env", extra="ignore"
    )

    @field_validator("api_url", mode="before")
    @classmethod
    def validate_api_url(cls, v):
        """Normalize the base URL so operation paths can be appended to it."""
        if v is None:
            return DEFAULT_API_URL
        return normalize_api_url(str(v))


# Process-wide Settings instance, shared by every thread
_settings: Settings | None = None
_settings_lock = threading.Lock()


def init_settings(**overrides) -> Settings:
    """
    Build settings from the environment, apply explicit overrides and install
    them as the process-wide default.
    """
    global _settings

    overrides = {key: value for key, value in overrides.items() if value is not None}
    settings = Settings(**overrides)
    with _settings_lock:
        _settings = settings
    return settings


def get_settings() -> Settings:
    global _settings

    with _settings_lock:
        if _settings is None:
            _settings = Settings()
        return _settings


class ClientConfig(BaseModel):
    """
    Immutable per-client configuration.

    Neither field is ever serialized into a request body. `api_url` falls
    back to the process-wide setting when omitted.
    """

    model_config = ConfigDict(frozen=True)

    api_secret: SecretStr
    api_url: str = Field(default_factory=lambda: get_settings().api_url)

    @field_validator("api_secret", mode="before")
    @classmethod
    def validate_api_secret(cls, v):
        raw = v.get_secret_value() if isinstance(v, SecretStr) else v
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError("api_secret must be a non-empty string")
        return v

    @field_validator("api_url", mode="before")
    @classmethod
    def validate_api_url(cls, v):
        return normalize_api_url(str(v))

    def endpoint(self, path: str) -> str:
        return f"{self.api_url}{path}"
