from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application configuration loaded from environment or .env."""

    app_name: str = Field(default="MindCheck Chat", alias="APP_NAME")
    app_env: str = Field(default="dev", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"], alias="CORS_ALLOW_ORIGINS"
    )

    inference_provider: str = Field(default="heuristic", alias="INFERENCE_PROVIDER")
    inference_timeout_seconds: float = Field(default=30.0, alias="INFERENCE_TIMEOUT_SECONDS")
    inference_canned_fallback: bool = Field(default=False, alias="INFERENCE_CANNED_FALLBACK")
    greeting_delay_seconds: float = Field(default=0.5, alias="GREETING_DELAY_SECONDS")

    gemini_api_key: Optional[SecretStr] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-pro", alias="GEMINI_MODEL")
    hf_api_key: Optional[SecretStr] = Field(default=None, alias="HF_API_KEY")
    hf_model_id: str = Field(
        default="mistralai/Mixtral-8x7B-Instruct-v0.1", alias="HF_MODEL_ID"
    )

    openai_api_key: Optional[SecretStr] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-3.5-turbo", alias="OPENAI_MODEL")
    azure_openai_endpoint: Optional[str] = Field(default=None, alias="AZURE_OPENAI_ENDPOINT")
    azure_openai_api_key: Optional[SecretStr] = Field(default=None, alias="AZURE_OPENAI_API_KEY")
    azure_openai_deployment: Optional[str] = Field(default=None, alias="AZURE_OPENAI_DEPLOYMENT")
    azure_openai_api_version: Optional[str] = Field(default=None, alias="AZURE_OPENAI_API_VERSION")

    bedrock_region: Optional[str] = Field(default=None, alias="BEDROCK_REGION")
    bedrock_model_id: Optional[str] = Field(default=None, alias="BEDROCK_MODEL_ID")
    aws_region: Optional[str] = Field(default=None, alias="AWS_REGION")
    aws_access_key_id: Optional[SecretStr] = Field(default=None, alias="AWS_ACCESS_KEY_ID")
    aws_secret_access_key: Optional[SecretStr] = Field(default=None, alias="AWS_SECRET_ACCESS_KEY")

    reports_directory: str = Field(default="reports", alias="REPORTS_DIRECTORY")
    s3_reports_bucket: Optional[str] = Field(default=None, alias="S3_REPORTS_BUCKET")
    s3_reports_prefix: Optional[str] = Field(default="reports/", alias="S3_REPORTS_PREFIX")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> AppSettings:
    """Return cached application settings."""
    return AppSettings()  # type: ignore[call-arg]
