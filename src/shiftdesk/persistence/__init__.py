"""Pluggable persistence backends behind Protocol interfaces."""

from __future__ import annotations

from typing import NamedTuple

from shiftdesk.core.config import AppSettings
from shiftdesk.core.protocols import ICacheBackend, IFileStore, IJobStore, ITemplateStore
from shiftdesk.persistence.dynamodb_backend import DynamoDBJobStore, DynamoDBTemplateStore
from shiftdesk.persistence.memory_backend import (
    MemoryCacheBackend,
    MemoryFileStore,
    MemoryJobStore,
    MemoryTemplateStore,
)
from shiftdesk.persistence.redis_backend import RedisCacheBackend
from shiftdesk.persistence.s3_backend import S3FileStore


class Persistence(NamedTuple):
    job_store: IJobStore
    template_store: ITemplateStore
    cache: ICacheBackend
    file_store: IFileStore


def create_persistence(settings: AppSettings | None = None) -> Persistence:
    """Create wired-up persistence backends from application settings."""
    if settings is None:
        settings = AppSettings()

    if settings.persistence.backend == "memory":
        return Persistence(
            job_store=MemoryJobStore(),
            template_store=MemoryTemplateStore(),
            cache=MemoryCacheBackend(),
            file_store=MemoryFileStore(),
        )

    ddb = settings.dynamodb
    return Persistence(
        job_store=DynamoDBJobStore(
            table_suffix=ddb.table_suffix, region=ddb.region, endpoint_url=ddb.endpoint_url,
        ),
        template_store=DynamoDBTemplateStore(
            table_suffix=ddb.table_suffix, region=ddb.region, endpoint_url=ddb.endpoint_url,
        ),
        cache=RedisCacheBackend(
            host=settings.redis.host, port=settings.redis.port, db=settings.redis.db,
        ),
        file_store=S3FileStore(
            bucket=settings.s3.bucket, region=settings.s3.region, endpoint_url=settings.s3.endpoint_url,
        ),
    )
