import base64
import binascii
import json
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError

from .gateway import DynamoUserGateway, PersistenceGateway
from .logging_config import (
    VALID_LOG_LEVELS,
    bind_request_id,
    configure_logging,
    get_logger,
    request_id_var,
)
from .pipeline import MSG_DB_ERROR, submit_user
from .settings import get_settings

logger = get_logger(__name__)

_gateway: Optional[PersistenceGateway] = None
_logging_ready = False


def _response(status_code: int, payload: Dict[str, Any]):
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload, ensure_ascii=False),
    }


def _parse_body(event) -> Optional[Dict[str, Any]]:
    body = (event or {}).get("body")
    if isinstance(body, dict):
        return body
    if not body or not isinstance(body, (str, bytes)):
        return None

    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return None

    # En proxy integration, body est une string JSON
    try:
        payload = json.loads(body)
    except json.JSONDecodeError:
        return None

    return payload if isinstance(payload, dict) else None


def _setup_logging() -> None:
    global _logging_ready
    if _logging_ready:
        return
    settings = get_settings()
    level = settings.log_level if settings.log_level.upper() in VALID_LOG_LEVELS else "INFO"
    configure_logging(level=level, service_name=settings.service_name)
    for problem in settings.validate():
        logger.warning("Configuration problem: %s", problem)
    _logging_ready = True


def get_gateway() -> PersistenceGateway:
    # une seule ressource DynamoDB par conteneur, réutilisée à chaud
    global _gateway
    if _gateway is None:
        _gateway = DynamoUserGateway.from_settings(get_settings())
    return _gateway


def set_gateway(gateway: Optional[PersistenceGateway]) -> None:
    global _gateway
    _gateway = gateway


def handler(event, context):
    _setup_logging()
    token = bind_request_id(getattr(context, "aws_request_id", None))
    try:
        logger.info("SubmitUser function processed a request.")
        try:
            gateway = get_gateway()
        except (BotoCoreError, ValueError):
            logger.exception("Could not create the DynamoDB gateway")
            return _response(500, {"message": MSG_DB_ERROR})

        outcome = submit_user(_parse_body(event), gateway)
        return _response(outcome.status, outcome.body)
    finally:
        request_id_var.reset(token)
