import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional

from .logging_config import VALID_LOG_LEVELS

DEFAULT_TABLE_NAME = "Users"
DEFAULT_SERVICE_NAME = "submit-user"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once from the environment."""

    table_name: str = DEFAULT_TABLE_NAME
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    log_level: str = "INFO"
    service_name: str = DEFAULT_SERVICE_NAME

    def validate(self) -> List[str]:
        errors: List[str] = []
        if not self.table_name:
            errors.append("USERS_TABLE is empty")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL invalide: {self.log_level}")
        return errors


def _load_from_env() -> Settings:
    return Settings(
        table_name=os.getenv("USERS_TABLE", DEFAULT_TABLE_NAME).strip(),
        region=os.getenv("AWS_REGION") or None,
        endpoint_url=os.getenv("DYNAMODB_ENDPOINT_URL") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        service_name=os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_from_env()
