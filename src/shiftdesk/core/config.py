"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class ImportConfig(BaseSettings):
    """CSV import behaviour."""

    model_config = {"env_prefix": "SHIFTDESK_IMPORT_"}

    company_id: str = "COMP001"
    # "default": bad dates / job types fall back to defaults; "reject": row error
    cell_policy: Literal["default", "reject"] = "default"
    max_displayed_errors: int = 5
    preview_rows: int = 3


class BulkConfig(BaseSettings):
    """Bulk creation loop configuration."""

    model_config = {"env_prefix": "SHIFTDESK_BULK_"}

    # None = wait indefinitely. A timed-out item is counted as failed, but the
    # store write already running in its worker thread is not cancelled and may
    # still persist the job.
    item_timeout_seconds: float | None = None
    progress_ttl_seconds: int = 4 * 60 * 60


class PersistenceConfig(BaseSettings):
    """Which persistence backends to wire."""

    model_config = {"env_prefix": "SHIFTDESK_PERSISTENCE_"}

    backend: Literal["memory", "aws"] = "memory"


class DynamoDBConfig(BaseSettings):
    """DynamoDB configuration."""

    model_config = {"env_prefix": "SHIFTDESK_DYNAMO_"}

    table_suffix: str = ""  # "-dev", "-uat", or "" for prod
    region: str = "eu-west-1"
    endpoint_url: str | None = None  # LocalStack override


class RedisConfig(BaseSettings):
    """Redis cache configuration."""

    model_config = {"env_prefix": "SHIFTDESK_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class S3Config(BaseSettings):
    """S3 file storage configuration."""

    model_config = {"env_prefix": "SHIFTDESK_S3_"}

    bucket: str = "shiftdesk-job-imports"
    region: str = "eu-west-1"
    endpoint_url: str | None = None  # LocalStack override


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "SHIFTDESK_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    imports: ImportConfig = ImportConfig()
    bulk: BulkConfig = BulkConfig()
    persistence: PersistenceConfig = PersistenceConfig()
    dynamodb: DynamoDBConfig = DynamoDBConfig()
    redis: RedisConfig = RedisConfig()
    s3: S3Config = S3Config()
