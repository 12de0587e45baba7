from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BITBUCKET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    bitbucket_url: str = Field(default="https://api.bitbucket.org/2.0")
    username: str | None = None
    app_password: str | None = None
    token: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="bitbucket-cloud-cli/0.1", min_length=1)
