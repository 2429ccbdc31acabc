from typing import Any, Dict, Optional, Protocol

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from .errors import PersistenceFailure


class PersistenceGateway(Protocol):
    def create_item(self, record: Dict[str, Any]) -> Dict[str, Any]:
        ...


class DynamoUserGateway:
    """Create-only access to the users table.

    The put is conditional on ``id`` so an existing item is never
    overwritten. Store errors are re-raised as ``PersistenceFailure``.
    """

    def __init__(self, table):
        self._table = table

    @classmethod
    def from_settings(cls, settings, resource=None) -> "DynamoUserGateway":
        if resource is None:
            kwargs: Dict[str, Optional[str]] = {}
            if settings.region:
                kwargs["region_name"] = settings.region
            if settings.endpoint_url:
                kwargs["endpoint_url"] = settings.endpoint_url
            resource = boto3.resource("dynamodb", **kwargs)
        return cls(resource.Table(settings.table_name))

    def create_item(self, record: Dict[str, Any]) -> Dict[str, Any]:
        try:
            self._table.put_item(
                Item=record,
                ConditionExpression=Attr("id").not_exists(),
            )
        except (ClientError, BotoCoreError) as e:
            raise PersistenceFailure(f"put_item failed for id {record.get('id')}") from e

        # put_item ne renvoie pas l'item, on renvoie ce qui a été écrit
        return dict(record)
