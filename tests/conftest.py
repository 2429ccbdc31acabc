"""Shared fixtures for the submit_user tests."""

import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

# permet de lancer pytest sans installer le paquet
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class FakeGateway:
    """In-memory stand-in for the DynamoDB gateway."""

    def __init__(self, error: Exception = None):
        self.items: List[Dict[str, Any]] = []
        self._error = error

    def create_item(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if self._error is not None:
            raise self._error
        self.items.append(dict(record))
        return dict(record)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def failing_gateway() -> FakeGateway:
    return FakeGateway(error=RuntimeError("connection reset by peer: secret-host:443"))


@pytest.fixture(autouse=True)
def _aws_env(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "eu-west-3")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("USERS_TABLE", "Users")
