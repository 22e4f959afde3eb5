# rfping_store.py
# DynamoDB access for ping records: append one item, scan them all back.
# boto3 errors (ClientError / BotoCoreError) are left for the handler to map to 500.

from typing import Any, Dict, List

import boto3

from rfping_model import Ping
from rfping_settings import Settings


class PingStore:
    def __init__(self, table: Any):
        self.table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> "PingStore":
        # boto3.resource is the high-level DynamoDB interface, items come back de-typed
        dynamodb = boto3.resource(
            "dynamodb",
            region_name=settings.region,
            endpoint_url=settings.endpoint_url,
        )
        return cls(dynamodb.Table(settings.table_name))

    def put(self, ping: Ping) -> None:
        self.table.put_item(Item=ping.to_dict())

    def scan_all(self) -> List[Dict[str, Any]]:
        """Return every item in the table, following scan pages until exhausted."""
        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {}
        while True:
            result = self.table.scan(**kwargs)
            items.extend(result.get("Items", []))
            last_key = result.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key
