# jobs/validators.py
"""
Composite validators for the job role admin form and the application form.
"""
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .constants import CV_ALLOWED_MIME_TYPES, CV_MAX_SIZE_BYTES, DEFAULT_JOB_ROLE_OPTIONS
from .validation import (
    ValidationResult,
    parse_date,
    parse_int,
    validate_email,
    validate_min_length,
    validate_url,
)

REQUIRED_FIELDS_ERROR = "All fields are required. Please fill in all information."


@dataclass
class JobRoleFormInput:
    role_name: str = ''
    description: str = ''
    responsibilities: str = ''
    job_spec_link: str = ''
    location: str = ''
    capability: str = ''
    band: str = ''
    closing_date: str = ''
    status: str = ''
    number_of_open_positions: str = ''

    def values(self):
        return (
            self.role_name, self.description, self.responsibilities, self.job_spec_link,
            self.location, self.capability, self.band, self.closing_date, self.status,
            self.number_of_open_positions,
        )


class JobRoleValidator:
    """
    Fail-fast validation of a job role form: the first broken rule wins and
    only its message is returned.

    ``options`` supplies the allowed dropdown values and ``today`` the clock
    used for the closing-date check, so both can be swapped in tests or
    replaced by values fetched from the backend.
    """

    def __init__(self, options=DEFAULT_JOB_ROLE_OPTIONS, today=date.today):
        self.options = options
        self.today = today

    def validate(self, data: JobRoleFormInput, is_update: bool = False) -> ValidationResult:
        checks = (
            lambda: self.validate_required_fields(data),
            lambda: self.validate_location(data.location),
            lambda: self.validate_capability(data.capability),
            lambda: self.validate_band(data.band),
            lambda: self.validate_status(data.status),
            lambda: self.validate_number_of_positions(data.number_of_open_positions),
            lambda: self.validate_closing_date(data.closing_date, allow_past=is_update),
            lambda: self.validate_job_spec_link(data.job_spec_link),
            lambda: self.validate_string_lengths(data),
        )
        for check in checks:
            result = check()
            if not result.is_valid:
                return result
        return ValidationResult.ok()

    def validate_required_fields(self, data):
        if any(not (value or '').strip() for value in data.values()):
            return ValidationResult.fail(REQUIRED_FIELDS_ERROR)
        return ValidationResult.ok()

    def _choice(self, value, allowed, label):
        if value.strip() not in allowed:
            return ValidationResult.fail(
                f'Invalid {label}: "{value}". Please select a valid {label.split()[0]} from the dropdown.'
            )
        return ValidationResult.ok()

    def validate_location(self, location):
        return self._choice(location, self.options.locations, 'location')

    def validate_capability(self, capability):
        return self._choice(capability, self.options.capabilities, 'capability')

    def validate_band(self, band):
        return self._choice(band, self.options.bands, 'band level')

    def validate_status(self, status):
        return self._choice(status, self.options.statuses, 'status')

    def validate_number_of_positions(self, raw):
        positions = parse_int(raw)
        if positions is None or positions < 1:
            return ValidationResult.fail("Number of open positions must be at least 1.")
        return ValidationResult.ok()

    def validate_closing_date(self, raw, allow_past=False):
        closing = parse_date(raw.strip())
        if closing is None:
            return ValidationResult.fail("Invalid date format. Please use YYYY-MM-DD format.")
        # same-day closing is fine; editing historical postings skips the check
        if not allow_past and closing < self.today():
            return ValidationResult.fail("Closing date cannot be in the past.")
        return ValidationResult.ok()

    def validate_job_spec_link(self, link):
        if not validate_url(link):
            return ValidationResult.fail(
                "Invalid URL format for Job Spec Link. URL must start with http:// or https://"
            )
        return ValidationResult.ok()

    def validate_string_lengths(self, data):
        for result in (
            validate_min_length(data.role_name, 3, "Role name must be at least 3 characters long."),
            validate_min_length(data.description, 10, "Job description must be at least 10 characters long."),
            validate_min_length(data.responsibilities, 10,
                                "Key responsibilities must be at least 10 characters long."),
        ):
            if not result.is_valid:
                return result
        return ValidationResult.ok()


# -------------------------
# Applications
# -------------------------
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
COVER_LETTER_MAX_LENGTH = 5000

# letters in any script, whitespace, hyphens and apostrophes
NAME_RE = re.compile(r"^(?:[^\W\d_]|[\s'-])+$")


@dataclass(frozen=True)
class UploadedFileInfo:
    original_name: str
    mime_type: str
    size_bytes: int

    @classmethod
    def from_upload(cls, upload):
        """Build from a Django UploadedFile (or None)."""
        if upload is None:
            return None
        return cls(
            original_name=upload.name,
            mime_type=getattr(upload, 'content_type', '') or '',
            size_bytes=upload.size,
        )


@dataclass
class ApplicationFormInput:
    applicant_name: str = ''
    applicant_email: str = ''
    cover_letter: str = ''
    cv: Optional[UploadedFileInfo] = None


class ApplicationValidator:
    """Accumulates one message per invalid field."""

    def validate_applicant_name(self, name):
        name = (name or '').strip()
        if not name:
            return "Applicant name is required"
        if len(name) < NAME_MIN_LENGTH:
            return f"Name must be at least {NAME_MIN_LENGTH} characters long"
        if len(name) > NAME_MAX_LENGTH:
            return f"Name must not exceed {NAME_MAX_LENGTH} characters"
        if not NAME_RE.match(name):
            return "Name can only contain letters, spaces, hyphens, and apostrophes"
        return None

    def validate_applicant_email(self, email):
        email = (email or '').strip()
        if not email:
            return "Email address is required"
        if len(email) > EMAIL_MAX_LENGTH:
            return "Email address is too long"
        if not validate_email(email).is_valid:
            return "Please provide a valid email address"
        return None

    def validate_cover_letter(self, cover_letter):
        if len((cover_letter or '').strip()) > COVER_LETTER_MAX_LENGTH:
            return f"Cover letter must not exceed {COVER_LETTER_MAX_LENGTH} characters"
        return None

    def validate_cv(self, cv):
        if cv is None:
            return "CV file is required"
        if cv.size_bytes > CV_MAX_SIZE_BYTES:
            return "CV file size must not exceed 5MB"
        if cv.mime_type not in CV_ALLOWED_MIME_TYPES:
            return "CV must be in PDF, DOC, or DOCX format"
        return None

    def field_errors(self, data: ApplicationFormInput) -> dict:
        errors = {
            'applicantName': self.validate_applicant_name(data.applicant_name),
            'applicantEmail': self.validate_applicant_email(data.applicant_email),
            'coverLetter': self.validate_cover_letter(data.cover_letter),
            'cv': self.validate_cv(data.cv),
        }
        return {k: v for k, v in errors.items() if v}

    def validate(self, data: ApplicationFormInput) -> ValidationResult:
        return ValidationResult(tuple(self.field_errors(data).values()))
