# jobs/tests/test_validators.py
from dataclasses import replace
from datetime import date

from django.test import SimpleTestCase

from jobs.constants import JobRoleOptions
from jobs.validators import (
    REQUIRED_FIELDS_ERROR,
    ApplicationFormInput,
    ApplicationValidator,
    JobRoleFormInput,
    JobRoleValidator,
    UploadedFileInfo,
)

VALID_ROLE = JobRoleFormInput(
    role_name='Software Engineer',
    description='Builds and maintains services.',
    responsibilities='Write code and review pull requests.',
    job_spec_link='https://example.com/spec',
    location='Belfast, Northern Ireland',
    capability='Engineering',
    band='Mid',
    closing_date='2025-02-01',
    status='Open',
    number_of_open_positions='2',
)


class JobRoleValidatorTest(SimpleTestCase):
    def setUp(self):
        self.validator = JobRoleValidator(today=lambda: date(2025, 1, 15))

    def check(self, is_update=False, **changes):
        return self.validator.validate(replace(VALID_ROLE, **changes), is_update=is_update)

    def test_valid_role(self):
        self.assertTrue(self.check().is_valid)

    def test_missing_field_wins_over_other_errors(self):
        result = self.check(role_name='   ', location='Atlantis', band='Principal')
        self.assertEqual(result.errors, (REQUIRED_FIELDS_ERROR,))

    def test_only_first_failure_is_reported(self):
        result = self.check(location='Belfast', band='Principal')
        self.assertEqual(
            result.errors,
            ('Invalid location: "Belfast". Please select a valid location from the dropdown.',),
        )

    def test_band_message(self):
        self.assertEqual(
            self.check(band='Principal').error,
            'Invalid band level: "Principal". Please select a valid band from the dropdown.',
        )

    def test_status_is_case_sensitive(self):
        self.assertEqual(
            self.check(status='open').error,
            'Invalid status: "open". Please select a valid status from the dropdown.',
        )

    def test_capability(self):
        self.assertFalse(self.check(capability='Sales').is_valid)

    def test_positions(self):
        for raw in ('0', '-3', '1.5', 'abc', '1_000', '٣', '+2'):
            with self.subTest(raw=raw):
                self.assertEqual(self.check(number_of_open_positions=raw).error,
                                 "Number of open positions must be at least 1.")

    def test_closing_date_format(self):
        for raw in ('01/02/2025', '2025-02-30', '2025-2-1'):
            with self.subTest(raw=raw):
                self.assertEqual(self.check(closing_date=raw).error,
                                 "Invalid date format. Please use YYYY-MM-DD format.")

    def test_closing_date_in_past(self):
        self.assertEqual(self.check(closing_date='2025-01-14').error, "Closing date cannot be in the past.")
        self.assertTrue(self.check(closing_date='2025-01-15').is_valid)

    def test_past_date_allowed_on_update(self):
        self.assertTrue(self.check(closing_date='2020-01-01', is_update=True).is_valid)

    def test_job_spec_link(self):
        self.assertEqual(
            self.check(job_spec_link='www.example.com').error,
            "Invalid URL format for Job Spec Link. URL must start with http:// or https://",
        )

    def test_lengths(self):
        self.assertEqual(self.check(role_name='QA').error, "Role name must be at least 3 characters long.")
        self.assertEqual(self.check(description='Short').error,
                         "Job description must be at least 10 characters long.")
        self.assertEqual(self.check(responsibilities='Short').error,
                         "Key responsibilities must be at least 10 characters long.")

    def test_injected_options(self):
        validator = JobRoleValidator(options=JobRoleOptions(locations=('Mars',)), today=lambda: date(2025, 1, 15))
        self.assertTrue(validator.validate(replace(VALID_ROLE, location='Mars')).is_valid)
        self.assertFalse(validator.validate(VALID_ROLE).is_valid)


class ApplicationValidatorTest(SimpleTestCase):
    def setUp(self):
        self.validator = ApplicationValidator()
        self.cv = UploadedFileInfo('cv.pdf', 'application/pdf', 1024)

    def test_valid_application(self):
        data = ApplicationFormInput("Seán O'Brien-Smith", 'sean@example.com', '', self.cv)
        self.assertEqual(self.validator.field_errors(data), {})
        self.assertTrue(self.validator.validate(data).is_valid)

    def test_collects_every_field(self):
        errors = self.validator.field_errors(ApplicationFormInput())
        self.assertEqual(errors, {
            'applicantName': "Applicant name is required",
            'applicantEmail': "Email address is required",
            'cv': "CV file is required",
        })

    def test_name_rules(self):
        self.assertEqual(self.validator.validate_applicant_name('J'), "Name must be at least 2 characters long")
        self.assertEqual(self.validator.validate_applicant_name('J' * 101), "Name must not exceed 100 characters")
        self.assertEqual(self.validator.validate_applicant_name('John3'),
                         "Name can only contain letters, spaces, hyphens, and apostrophes")

    def test_email_rules(self):
        self.assertEqual(self.validator.validate_applicant_email('x' * 250 + '@a.com'), "Email address is too long")
        self.assertEqual(self.validator.validate_applicant_email('nope'), "Please provide a valid email address")

    def test_cover_letter_limit(self):
        self.assertIsNone(self.validator.validate_cover_letter('a' * 5000))
        self.assertEqual(self.validator.validate_cover_letter('a' * 5001),
                         "Cover letter must not exceed 5000 characters")

    def test_cv_rules(self):
        big = UploadedFileInfo('cv.pdf', 'application/pdf', 6 * 1024 * 1024)
        png = UploadedFileInfo('cv.png', 'image/png', 1024)
        self.assertEqual(self.validator.validate_cv(big), "CV file size must not exceed 5MB")
        self.assertEqual(self.validator.validate_cv(png), "CV must be in PDF, DOC, or DOCX format")
