from .errors import MissingField, PersistenceFailure, SubmitUserError, ValidationFailure
from .gateway import DynamoUserGateway, PersistenceGateway
from .pipeline import (
    SanitizedFields,
    SubmitOutcome,
    UserRecord,
    build_record,
    guard_input,
    sanitize,
    sanitize_fields,
    submit_user,
    validate,
)

__all__ = [
    "DynamoUserGateway",
    "MissingField",
    "PersistenceFailure",
    "PersistenceGateway",
    "SanitizedFields",
    "SubmitOutcome",
    "SubmitUserError",
    "UserRecord",
    "ValidationFailure",
    "build_record",
    "guard_input",
    "sanitize",
    "sanitize_fields",
    "submit_user",
    "validate",
]
