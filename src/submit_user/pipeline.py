import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from .errors import MissingField, ValidationFailure
from .gateway import PersistenceGateway
from .logging_config import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ["firstName", "lastName", "email"]
MAX_LENGTH = 100

MSG_REQUIRED = "All fields are required."
MSG_TOO_LONG = f"Fields must be {MAX_LENGTH} characters or less."
MSG_BAD_EMAIL = "Please provide a valid email address."
MSG_DB_ERROR = "Error writing to database."

# un "<" non fermé avale la fin de la chaîne
TAG_RE = re.compile(r"<[^>]*>?")
EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

# blancs Unicode, sans \x1c-\x1f ni \x85
TRIM_CHARS = (
    " \t\n\v\f\r\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


@dataclass(frozen=True)
class SanitizedFields:
    firstName: str
    lastName: str
    email: str

    def values(self) -> List[str]:
        return [self.firstName, self.lastName, self.email]


@dataclass(frozen=True)
class UserRecord:
    id: str
    firstName: str
    lastName: str
    email: str
    submittedDate: str

    def to_item(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.firstName,
            "lastName": self.lastName,
            "email": self.email,
            "submittedDate": self.submittedDate,
        }


@dataclass
class SubmitOutcome:
    status: int
    body: Dict[str, Any] = field(default_factory=dict)


def guard_input(body: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not body:
        raise MissingField(REQUIRED_FIELDS)

    missing = [f for f in REQUIRED_FIELDS if not body.get(f)]
    if missing:
        raise MissingField(missing)

    return body


def sanitize(value: Any) -> str:
    """Strip tag-like substrings and surrounding whitespace.

    ``None`` becomes an empty string; other non-string values are
    converted with ``str()`` first. The result never contains ``<``.
    """
    if value is None:
        return ""
    return TAG_RE.sub("", str(value)).strip(TRIM_CHARS)


def sanitize_fields(body: Dict[str, Any]) -> SanitizedFields:
    return SanitizedFields(
        firstName=sanitize(body.get("firstName")),
        lastName=sanitize(body.get("lastName")),
        email=sanitize(body.get("email")),
    )


def is_valid_email(email: str) -> bool:
    if not email:
        return False
    return EMAIL_RE.search(email.lower()) is not None


def validate(fields: SanitizedFields) -> List[str]:
    errors: List[str] = []
    values = fields.values()

    if any(len(v) == 0 for v in values):
        errors.append(MSG_REQUIRED)
    if any(len(v) > MAX_LENGTH for v in values):
        errors.append(MSG_TOO_LONG)
    if not is_valid_email(fields.email):
        errors.append(MSG_BAD_EMAIL)

    return errors


def _now_utc() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


def build_record(
    fields: SanitizedFields,
    id_factory: Callable[[], str] = _new_id,
    clock: Callable[[], str] = _now_utc,
) -> UserRecord:
    return UserRecord(
        id=id_factory(),
        firstName=fields.firstName,
        lastName=fields.lastName,
        email=fields.email,
        submittedDate=clock(),
    )


def submit_user(
    body: Optional[Dict[str, Any]],
    gateway: PersistenceGateway,
    id_factory: Callable[[], str] = _new_id,
    clock: Callable[[], str] = _now_utc,
) -> SubmitOutcome:
    """Run one submission through guard, sanitize, validate and persist.

    Every path ends in a ``SubmitOutcome``; store errors are logged and
    reported as an opaque 500.
    """
    try:
        payload = guard_input(body)
        fields = sanitize_fields(payload)

        # toujours valider les valeurs nettoyées, jamais le brut
        violations = validate(fields)
        if violations:
            raise ValidationFailure(violations)
    except MissingField:
        return SubmitOutcome(400, {"message": MSG_REQUIRED})
    except ValidationFailure as e:
        logger.info("Submission rejected", extra={"violation_count": len(e.violations)})
        return SubmitOutcome(400, {"message": " ".join(e.violations)})

    record = build_record(fields, id_factory=id_factory, clock=clock)

    try:
        created = gateway.create_item(record.to_item())
    except Exception:
        logger.exception("An error occurred while writing to the database")
        return SubmitOutcome(500, {"message": MSG_DB_ERROR})

    logger.info("Created item with id: %s", created["id"])
    return SubmitOutcome(201, {"message": f"Success! User {created['firstName']} added."})
