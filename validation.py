"""Input checks for guest requests.

Everything coming from a request goes through here before it reaches the
datastore: the id in the URL through parse_guest_id, the JSON body through
parse_guest_input. Both raise a GuestInputError subclass that the web layer
turns into a 400 response.
"""
import re
from dataclasses import dataclass
from typing import Optional

from models import MAX_GUESTID

GUESTID_ERROR = "guestid must be positive integer"
INVALID_BODY = "invalid JSON body"
VALIDATION_ERROR = "validation error"

OPTIONAL_FIELDS = ('phone', 'email', 'address')

# Plain decimal only; "1e2", "2.0" and "0x10" are not ids
_INT_RE = re.compile(r'\s*[+-]?\d+\s*', re.ASCII)


class GuestInputError(Exception):
    message = "bad request"

    def to_dict(self):
        return {'message': self.message}


class InvalidGuestId(GuestInputError):
    message = GUESTID_ERROR


class InvalidBody(GuestInputError):
    message = INVALID_BODY


class GuestValidationError(GuestInputError):
    message = VALIDATION_ERROR

    def __init__(self, errors):
        super().__init__(errors)
        self.errors = list(errors)

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


@dataclass(frozen=True)
class GuestInput:
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    guestid: Optional[int] = None


def validate_guest(body):
    """Returns the list of problems with a candidate guest, empty if valid."""
    errors = []

    name = body.get('name')
    if not isinstance(name, str) or name.strip() == "":
        errors.append("name is required (non-empty string)")

    for field in OPTIONAL_FIELDS:
        if field in body and not isinstance(body[field], str):
            errors.append(f"{field} must be string if provided")

    return errors


def _is_positive_int(value):
    # bool is an int subclass, JSON true is not an id
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def parse_guest_id(raw):
    if isinstance(raw, str):
        if not _INT_RE.fullmatch(raw):
            raise InvalidGuestId()
        raw = int(raw)
    if not _is_positive_int(raw):
        raise InvalidGuestId()
    return raw


def parse_guest_input(body, allow_id=False):
    """Turns a decoded JSON body into a GuestInput.

    allow_id is set for creation only; on replace the id comes from the URL
    and any guestid in the body is ignored.
    """
    if not isinstance(body, dict):
        raise InvalidBody()

    errors = validate_guest(body)

    guestid = None
    if allow_id and body.get('guestid') is not None:
        if _is_positive_int(body['guestid']) and body['guestid'] <= MAX_GUESTID:
            guestid = body['guestid']
        else:
            errors.append(GUESTID_ERROR)

    if errors:
        raise GuestValidationError(errors)

    return GuestInput(
        name=body['name'].strip(),
        phone=body.get('phone'),
        email=body.get('email'),
        address=body.get('address'),
        guestid=guestid,
    )
