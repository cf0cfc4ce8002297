from collections.abc import Generator
from typing import Annotated

from fast_depends import Depends
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="api_errors_",
        env_file=".env",
        extra="ignore",
    )

    # None means "verbose when the `apierrors` logger is enabled for DEBUG"
    verbose: bool | None = None

    # Redacted in addition to `Authorization`, which is always redacted
    redact_headers: list[str] = ["Authorization"]


def api_settings(**kwargs: dict) -> Generator[Settings, None, None]:
    settings = Settings(**kwargs)
    yield settings


ApiErrorSettings = Annotated[Settings, Depends(api_settings)]
