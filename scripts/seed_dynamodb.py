"""Create the ShiftDesk DynamoDB tables and seed the default job templates.

Usage:
    python scripts/seed_dynamodb.py --endpoint-url http://localhost:4566
"""

from __future__ import annotations

import argparse
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import boto3

TABLE_DEFINITIONS: list[dict[str, Any]] = [
    {"name": "shiftdesk-job-postings"},
    {"name": "shiftdesk-job-templates"},
]

SEED_PATH = Path(__file__).resolve().parent.parent / "config" / "template_seed.json"


def create_tables(ddb: Any, suffix: str = "") -> None:
    """Create both tables. Skips tables that already exist."""
    client = ddb.meta.client
    existing = client.list_tables().get("TableNames", [])

    for defn in TABLE_DEFINITIONS:
        table_name = f"{defn['name']}{suffix}"
        if table_name in existing:
            print(f"  Table {table_name} already exists, skipping")
            continue
        client.create_table(
            TableName=table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        print(f"  Created table {table_name}")


def _json_to_dynamodb(obj: Any) -> Any:
    """Convert JSON-parsed floats to Decimal for DynamoDB."""
    if isinstance(obj, float):
        return Decimal(str(obj))
    if isinstance(obj, dict):
        return {k: _json_to_dynamodb(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_json_to_dynamodb(i) for i in obj]
    return obj


def seed_templates(ddb: Any, suffix: str = "", seed_path: Path = SEED_PATH) -> int:
    """Load template_seed.json into the templates table; returns the count."""
    data = json.loads(seed_path.read_text())
    company_id = data["company_id"]

    tbl = ddb.Table(f"shiftdesk-job-templates{suffix}")
    with tbl.batch_writer() as batch:
        for template in data["templates"]:
            item = {
                "PK": f"COMPANY#{company_id}",
                "SK": f"TEMPLATE#{template['template_id']}",
                "company_id": company_id,
                **template,
            }
            batch.put_item(Item=_json_to_dynamodb(item))
    print(f"  Seeded {len(data['templates'])} job templates for {company_id}")
    return len(data["templates"])


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed DynamoDB tables for ShiftDesk")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="eu-west-1", help="AWS region")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)
    create_tables(ddb, suffix=args.table_suffix)
    seed_templates(ddb, suffix=args.table_suffix)


if __name__ == "__main__":
    main()
