"""DynamoDB backends for job postings and job templates."""

from __future__ import annotations

import asyncio
import json
import uuid
from decimal import Decimal
from typing import Any

import boto3
from botocore.exceptions import ClientError
from pydantic import BaseModel

from shiftdesk.core.exceptions import StoreError
from shiftdesk.models.job_draft import JobDraft
from shiftdesk.models.template import JobTemplate

JOBS_TABLE = "shiftdesk-job-postings"
TEMPLATES_TABLE = "shiftdesk-job-templates"


def _to_item(model: BaseModel) -> dict[str, Any]:
    """Dump a model to a DynamoDB-safe dict (floats become Decimal)."""
    return json.loads(model.model_dump_json(), parse_float=Decimal)


def _decode_decimals(item: dict[str, Any]) -> dict[str, Any]:
    """Convert Decimal values in a DynamoDB item to int/float."""
    out: dict[str, Any] = {}
    for k, v in item.items():
        if isinstance(v, Decimal):
            out[k] = int(v) if v == int(v) else float(v)
        elif isinstance(v, dict):
            out[k] = _decode_decimals(v)
        elif isinstance(v, list):
            out[k] = [
                _decode_decimals(i) if isinstance(i, dict)
                else (int(i) if isinstance(i, Decimal) and i == int(i) else float(i) if isinstance(i, Decimal) else i)
                for i in v
            ]
        else:
            out[k] = v
    return out


def _resource(region: str, endpoint_url: str | None):
    kwargs: dict = {"region_name": region}
    if endpoint_url:
        kwargs["endpoint_url"] = endpoint_url
    return boto3.resource("dynamodb", **kwargs)


class DynamoDBJobStore:
    """Production IJobStore: one item per created job posting."""

    def __init__(self, table_suffix: str = "", region: str = "eu-west-1",
                 endpoint_url: str | None = None) -> None:
        self._table = _resource(region, endpoint_url).Table(f"{JOBS_TABLE}{table_suffix}")

    async def create(self, draft: JobDraft) -> bool:
        # boto3 blocks; keep the event loop free while DynamoDB answers
        await asyncio.to_thread(self._put, draft)
        return True

    def _put(self, draft: JobDraft) -> str:
        job_id = uuid.uuid4().hex
        item = {
            "PK": f"COMPANY#{draft.company_id}",
            "SK": f"JOB#{job_id}",
            "job_id": job_id,
            **_to_item(draft),
        }
        try:
            self._table.put_item(Item=item)
        except ClientError as exc:
            raise StoreError(f"DynamoDB put failed for job {draft.title!r}: {exc}") from exc
        return job_id

    def list_jobs(self, company_id: str) -> list[dict[str, Any]]:
        try:
            resp = self._table.query(
                KeyConditionExpression="PK = :pk",
                ExpressionAttributeValues={":pk": f"COMPANY#{company_id}"},
            )
        except ClientError as exc:
            raise StoreError(f"DynamoDB query failed for company {company_id!r}: {exc}") from exc
        return [_decode_decimals(item) for item in resp.get("Items", [])]


class DynamoDBTemplateStore:
    """Production ITemplateStore: PK=COMPANY#{companyId}, SK=TEMPLATE#{templateId}."""

    def __init__(self, table_suffix: str = "", region: str = "eu-west-1",
                 endpoint_url: str | None = None) -> None:
        self._table = _resource(region, endpoint_url).Table(f"{TEMPLATES_TABLE}{table_suffix}")

    @staticmethod
    def _key(company_id: str, template_id: str) -> dict[str, str]:
        return {"PK": f"COMPANY#{company_id}", "SK": f"TEMPLATE#{template_id}"}

    def get(self, company_id: str, template_id: str) -> JobTemplate | None:
        try:
            resp = self._table.get_item(Key=self._key(company_id, template_id))
        except ClientError as exc:
            raise StoreError(f"DynamoDB get failed for template {template_id!r}: {exc}") from exc
        item = resp.get("Item")
        return JobTemplate.model_validate(_decode_decimals(item)) if item else None

    def put(self, template: JobTemplate) -> None:
        item = {**self._key(template.company_id, template.template_id), **_to_item(template)}
        try:
            self._table.put_item(Item=item)
        except ClientError as exc:
            raise StoreError(f"DynamoDB put failed for template {template.template_id!r}: {exc}") from exc

    def delete(self, company_id: str, template_id: str) -> bool:
        try:
            resp = self._table.delete_item(
                Key=self._key(company_id, template_id), ReturnValues="ALL_OLD",
            )
        except ClientError as exc:
            raise StoreError(f"DynamoDB delete failed for template {template_id!r}: {exc}") from exc
        return bool(resp.get("Attributes"))

    def list_for_company(self, company_id: str) -> list[JobTemplate]:
        kwargs: dict[str, Any] = {
            "KeyConditionExpression": "PK = :pk AND begins_with(SK, :sk)",
            "ExpressionAttributeValues": {":pk": f"COMPANY#{company_id}", ":sk": "TEMPLATE#"},
        }
        items: list[dict[str, Any]] = []
        try:
            while True:
                resp = self._table.query(**kwargs)
                items.extend(resp.get("Items", []))
                if "LastEvaluatedKey" not in resp:
                    break
                kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        except ClientError as exc:
            raise StoreError(f"DynamoDB query failed for company {company_id!r}: {exc}") from exc
        return [JobTemplate.model_validate(_decode_decimals(item)) for item in items]
