# jobs/forms.py
from django import forms
from django.core.exceptions import ValidationError

from .api import job_role_payload
from .constants import CV_ALLOWED_MIME_TYPES, CV_MAX_SIZE_BYTES
from .validation import parse_int
from .validators import (
    ApplicationFormInput,
    ApplicationValidator,
    JobRoleFormInput,
    JobRoleValidator,
    UploadedFileInfo,
)


class JobRoleForm(forms.Form):
    """
    Admin create/edit form. Django only trims the values; JobRoleValidator
    decides validity and its single message becomes the form's non-field error.
    """
    roleName = forms.CharField(required=False)
    description = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 5}))
    responsibilities = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 5}))
    jobSpecLink = forms.CharField(required=False)
    location = forms.CharField(required=False)
    capability = forms.CharField(required=False)
    band = forms.CharField(required=False)
    closingDate = forms.CharField(required=False, widget=forms.DateInput(attrs={'type': 'date'}))
    status = forms.CharField(required=False)
    numberOfOpenPositions = forms.CharField(required=False)

    def __init__(self, *args, is_update=False, validator=None, **kwargs):
        self.is_update = is_update
        self.validator = validator or JobRoleValidator()
        super().__init__(*args, **kwargs)

    @classmethod
    def initial_from_job_role(cls, job_role):
        return {
            'roleName': job_role.role_name,
            'description': job_role.description,
            'responsibilities': job_role.responsibilities,
            'jobSpecLink': job_role.job_spec_link,
            'location': job_role.location,
            'capability': job_role.capability,
            'band': job_role.band,
            'closingDate': job_role.closing_date,
            'status': job_role.status,
            'numberOfOpenPositions': str(job_role.number_of_open_positions),
        }

    def to_input(self, cleaned=None):
        c = cleaned if cleaned is not None else self.cleaned_data
        return JobRoleFormInput(
            role_name=c.get('roleName', ''),
            description=c.get('description', ''),
            responsibilities=c.get('responsibilities', ''),
            job_spec_link=c.get('jobSpecLink', ''),
            location=c.get('location', ''),
            capability=c.get('capability', ''),
            band=c.get('band', ''),
            closing_date=c.get('closingDate', ''),
            status=c.get('status', ''),
            number_of_open_positions=c.get('numberOfOpenPositions', ''),
        )

    def clean(self):
        cleaned = super().clean()
        result = self.validator.validate(self.to_input(cleaned), is_update=self.is_update)
        if not result.is_valid:
            raise ValidationError(result.error)
        return cleaned

    @property
    def error(self):
        errors = self.non_field_errors()
        return errors[0] if errors else None

    def backend_payload(self):
        data = self.to_input()
        return job_role_payload(
            role_name=data.role_name,
            description=data.description,
            responsibilities=data.responsibilities,
            job_spec_link=data.job_spec_link,
            location=data.location,
            capability=data.capability,
            band=data.band,
            closing_date=data.closing_date,
            status=data.status,
            number_of_open_positions=parse_int(data.number_of_open_positions),
        )


def check_cv_upload(files):
    """
    Upload gate that runs before the form: one file under "cv", an allowed
    MIME type, at most 5 MB. Returns an error message or None.
    """
    uploads = files.getlist('cv')
    if len(uploads) > 1:
        return "Too many files uploaded. Please upload only one CV file."
    if not uploads:
        return None
    cv = uploads[0]
    if cv.size > CV_MAX_SIZE_BYTES:
        return "File is too large. Maximum file size is 5MB. Please upload a smaller file."
    if getattr(cv, 'content_type', None) not in CV_ALLOWED_MIME_TYPES:
        return "Invalid file type. Only PDF, DOC, and DOCX files are allowed."
    return None


class ApplicationForm(forms.Form):
    applicantName = forms.CharField(required=False)
    applicantEmail = forms.CharField(required=False)
    coverLetter = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 6}))
    cv = forms.FileField(required=False)

    def clean(self):
        cleaned = super().clean()
        data = ApplicationFormInput(
            applicant_name=cleaned.get('applicantName', ''),
            applicant_email=cleaned.get('applicantEmail', ''),
            cover_letter=cleaned.get('coverLetter', ''),
            cv=UploadedFileInfo.from_upload(cleaned.get('cv')),
        )
        for field, message in ApplicationValidator().field_errors(data).items():
            # an upload Django already rejected (e.g. empty file) keeps its own message
            if field == 'cv' and self.has_error('cv'):
                continue
            self.add_error(field, message)
        return cleaned

    def error_summary(self):
        messages = [e for field_errors in self.errors.values() for e in field_errors]
        return "Please correct the following errors: " + ". ".join(messages)
