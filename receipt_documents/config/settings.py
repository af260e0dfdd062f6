from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"
    app_url: str = ""

    http_host: str = "0.0.0.0"
    http_port: int = 8000

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "receipts"
    db_username: str = "receipts"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_pool_timeout_seconds: float = 30.0

    enable_expense_documents: bool = False
    s3_upload_bucket: str = ""
    s3_upload_key: str = ""
    s3_upload_secret: str = ""
    s3_upload_region: str = ""
    s3_upload_endpoint: str = ""
    s3_max_file_size: int = 5 * 1024 * 1024
    signed_url_ttl_seconds: int = 300

    enable_receipt_extract: bool = False
    extraction_provider: str = "openai"
    extraction_structured_output: bool = False
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_image_model: str = "gpt-5-nano"
    openai_timeout_seconds: int = 30
