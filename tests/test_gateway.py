"""Tests for DynamoUserGateway against a stubbed DynamoDB client."""

import boto3
import pytest
from botocore.stub import ANY, Stubber

from submit_user.errors import PersistenceFailure
from submit_user.gateway import DynamoUserGateway
from submit_user.settings import Settings

ITEM = {
    "id": "0b7c6f0e-1111-4a2b-9c3d-000000000001",
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "jane@example.com",
    "submittedDate": "2026-01-01T00:00:00+00:00",
}


@pytest.fixture
def table():
    resource = boto3.resource("dynamodb", region_name="eu-west-3")
    return resource.Table("Users")


@pytest.fixture
def stubber(table):
    with Stubber(table.meta.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


class TestCreateItem:
    def test_put_is_conditional_on_id(self, table, stubber) -> None:
        stubber.add_response(
            "put_item",
            {},
            {
                "TableName": "Users",
                "Item": ITEM,
                "ConditionExpression": ANY,
            },
        )

        created = DynamoUserGateway(table).create_item(ITEM)

        assert created == ITEM
        assert created is not ITEM

    def test_existing_id_is_a_failure(self, table, stubber) -> None:
        stubber.add_client_error(
            "put_item",
            service_error_code="ConditionalCheckFailedException",
            service_message="The conditional request failed",
            http_status_code=400,
        )

        with pytest.raises(PersistenceFailure) as exc:
            DynamoUserGateway(table).create_item(ITEM)

        assert ITEM["id"] in str(exc.value)
        assert exc.value.__cause__ is not None

    def test_throttling_is_a_failure(self, table, stubber) -> None:
        stubber.add_client_error(
            "put_item",
            service_error_code="ProvisionedThroughputExceededException",
            http_status_code=400,
        )

        with pytest.raises(PersistenceFailure):
            DynamoUserGateway(table).create_item(ITEM)


class TestFromSettings:
    def test_uses_table_name(self) -> None:
        resource = boto3.resource("dynamodb", region_name="eu-west-3")
        gw = DynamoUserGateway.from_settings(Settings(table_name="People"), resource=resource)
        assert gw._table.name == "People"

    def test_builds_resource_from_settings(self) -> None:
        settings = Settings(table_name="Users", region="eu-west-1", endpoint_url="http://localhost:8000")
        gw = DynamoUserGateway.from_settings(settings)

        client = gw._table.meta.client
        assert client.meta.region_name == "eu-west-1"
        assert client.meta.endpoint_url == "http://localhost:8000"
