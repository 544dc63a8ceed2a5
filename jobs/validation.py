# jobs/validation.py
"""
Primitive validators and the sanitizer.

Every function here checks a single value and never raises for string input;
callers branch on None / False / ValidationResult.is_valid.
"""
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Tuple

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

# Largest integer an ID may take (same ceiling the backend's JSON clients can hold exactly)
MAX_SAFE_ID = 2 ** 53 - 1

DATE_RE = re.compile(r'[0-9]{4}-[0-9]{2}-[0-9]{2}')
INTEGER_RE = re.compile(r'-?[0-9]+')

_url_validator = URLValidator(schemes=['http', 'https'])

EMAIL_MAX_LENGTH = 254
EMAIL_LOCAL_MAX_LENGTH = 64
EMAIL_RE = re.compile(
    r'^[A-Za-z0-9!#$%&\'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&\'*+/=?^_`{|}~-]+)*'
    r'@[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?)+$'
)

PASSWORD_MIN_LENGTH = 8
PASSWORD_SPECIAL_CHARS = '!@#$%^&*(),.?":{}|<>'
STRONG_PASSWORD_SCORE = 3

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_RE = re.compile(r'^[A-Za-z0-9_]+$')
RESERVED_USERNAMES = frozenset({'admin', 'administrator', 'root', 'system', 'api', 'www'})


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of any validator. Valid iff ``errors`` is empty.

    Fail-fast validators put exactly one message in ``errors``; accumulating
    validators put every message they found.
    """
    errors: Tuple[str, ...] = ()

    @classmethod
    def ok(cls):
        return cls()

    @classmethod
    def fail(cls, *errors):
        if not errors:
            raise ValueError("A failed ValidationResult needs at least one error.")
        return cls(tuple(errors))

    @classmethod
    def merge(cls, *results):
        errors = []
        for r in results:
            errors.extend(r.errors)
        return cls(tuple(errors))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error(self) -> Optional[str]:
        return self.errors[0] if self.errors else None

    def __bool__(self):
        return self.is_valid


@dataclass(frozen=True)
class PasswordStrength:
    score: int
    missing: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_strong(self) -> bool:
        return self.score >= STRONG_PASSWORD_SCORE


def validate_id(raw) -> Optional[int]:
    """
    Parse a positive integer ID from a path or form value.
    Returns the int, or None when the value is not a plain run of ASCII digits,
    is zero, or exceeds MAX_SAFE_ID. Leading zeros are accepted ("007" -> 7).
    """
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    # str.isdigit() accepts non-ASCII digits, so check the range explicitly
    if not all('0' <= c <= '9' for c in trimmed):
        return None
    value = int(trimmed)
    if value <= 0 or value > MAX_SAFE_ID:
        return None
    return value


def parse_date(raw) -> Optional[date]:
    """Return the calendar date for an exact YYYY-MM-DD string, else None."""
    if not isinstance(raw, str) or not DATE_RE.fullmatch(raw):
        return None
    year, month, day = (int(part) for part in raw.split('-'))
    try:
        parsed = datetime(year, month, day, tzinfo=timezone.utc)
    except ValueError:
        return None
    if (parsed.year, parsed.month, parsed.day) != (year, month, day):
        return None
    return parsed.date()


def validate_date(raw) -> bool:
    return parse_date(raw) is not None


def validate_url(raw) -> bool:
    """True for absolute http(s) URLs with a valid host (Django's URLValidator)."""
    if not isinstance(raw, str):
        return False
    try:
        _url_validator(raw.strip())
    except ValidationError:
        return False
    return True


def parse_int(raw) -> Optional[int]:
    """Integer from an optionally signed run of ASCII digits, else None ("1_000", "٣", "1.5" -> None)."""
    if not isinstance(raw, str):
        return None
    trimmed = raw.strip()
    if not INTEGER_RE.fullmatch(trimmed):
        return None
    return int(trimmed)


def validate_email(raw) -> ValidationResult:
    """
    Strict address check. Collects every violated rule rather than stopping
    at the first one, so the caller can show them together.
    """
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.fail("Email is required")

    email = raw.strip()
    errors = []
    if len(email) > EMAIL_MAX_LENGTH:
        errors.append(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")

    local, sep, domain = email.partition('@')
    if sep and len(local) > EMAIL_LOCAL_MAX_LENGTH:
        errors.append(f"The part before @ must not exceed {EMAIL_LOCAL_MAX_LENGTH} characters")

    if not EMAIL_RE.match(email):
        errors.append("Please enter a valid email address")

    return ValidationResult(tuple(errors))


def password_strength(raw) -> PasswordStrength:
    password = raw if isinstance(raw, str) else ''
    checks = (
        (len(password) >= PASSWORD_MIN_LENGTH,
         f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"),
        (any(c.islower() for c in password),
         "Password must contain at least one lowercase letter"),
        (any(c.isupper() for c in password),
         "Password must contain at least one uppercase letter"),
        (any('0' <= c <= '9' for c in password),
         "Password must contain at least one number"),
        (any(c in PASSWORD_SPECIAL_CHARS for c in password),
         f"Password must contain at least one special character ({PASSWORD_SPECIAL_CHARS})"),
    )
    missing = tuple(message for passed, message in checks if not passed)
    return PasswordStrength(score=len(checks) - len(missing), missing=missing)


def validate_username(raw) -> ValidationResult:
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.fail("Username is required")
    username = raw.strip()
    if len(username) < USERNAME_MIN_LENGTH:
        return ValidationResult.fail(f"Username must be at least {USERNAME_MIN_LENGTH} characters long")
    if len(username) > USERNAME_MAX_LENGTH:
        return ValidationResult.fail(f"Username must not exceed {USERNAME_MAX_LENGTH} characters")
    if not USERNAME_RE.match(username):
        return ValidationResult.fail("Username can only contain letters, numbers and underscores")
    if username.lower() in RESERVED_USERNAMES:
        return ValidationResult.fail("This username is reserved")
    return ValidationResult.ok()


def validate_min_length(value, minimum, message) -> ValidationResult:
    if not isinstance(value, str) or len(value.strip()) < minimum:
        return ValidationResult.fail(message)
    return ValidationResult.ok()


# an "&" that already starts one of the entities below is left alone,
# so a second pass over sanitized text changes nothing
_BARE_AMPERSAND_RE = re.compile(r'&(?!(?:amp|lt|gt|quot|#x27);)')

_HTML_ESCAPES = (
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&#x27;'),
)


def sanitize_string(raw: str) -> str:
    """
    HTML-escape ``raw`` and trim it. Escaping is idempotent, which makes it
    lossy for text that literally contains one of the five entities: the
    input "&amp;" comes back unchanged and so displays as "&".
    """
    text = _BARE_AMPERSAND_RE.sub('&amp;', raw)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text.strip()
