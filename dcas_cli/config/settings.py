from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Logging settings
    LOG_LEVEL: str = "WARNING"

    # HTTP transport settings
    HTTP_TIMEOUT: float = 30.0
    HTTP_VERIFY_TLS: bool = True

    # Validate the JSON patch of OTP (older protocol) updates before submission.
    # Disable to send the raw patch text unmodified.
    VALIDATE_OTP_PATCH: bool = True

    model_config = SettingsConfigDict(env_prefix="DCAS_", env_file=".env", extra="ignore")

@lru_cache()
def get_settings():
    """
    Get cached settings to avoid reloading from environment each time.
    """
    return Settings()
