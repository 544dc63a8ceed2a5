# jobs/tests/test_forms.py
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from jobs.forms import ApplicationForm, JobRoleForm

APPLICANT = {'applicantName': 'Jane Doe', 'applicantEmail': 'jane@example.com'}


class ApplicationFormTest(SimpleTestCase):
    def test_missing_cv(self):
        form = ApplicationForm(APPLICANT, {})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['cv'], ["CV file is required"])

    def test_empty_cv_keeps_its_own_error(self):
        form = ApplicationForm(APPLICANT, {'cv': SimpleUploadedFile('cv.pdf', b'', content_type='application/pdf')})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.errors['cv'], ["The submitted file is empty."])

    def test_valid(self):
        form = ApplicationForm(APPLICANT, {'cv': SimpleUploadedFile('cv.pdf', b'%PDF', content_type='application/pdf')})
        self.assertTrue(form.is_valid())


class JobRoleFormTest(SimpleTestCase):
    def test_payload_positions_is_int(self):
        form = JobRoleForm({
            'roleName': 'Software Engineer',
            'description': 'Builds and maintains services.',
            'responsibilities': 'Write code and review pull requests.',
            'jobSpecLink': 'https://example.com/spec',
            'location': 'Belfast, Northern Ireland',
            'capability': 'Engineering',
            'band': 'Mid',
            'closingDate': '2099-12-31',
            'status': 'Open',
            'numberOfOpenPositions': ' 4 ',
        })
        self.assertTrue(form.is_valid())
        self.assertEqual(form.backend_payload()['numberOfOpenPositions'], 4)
