# accounts/forms.py
from django import forms
from django.core.exceptions import ValidationError

from .validators import AuthValidator


class LoginForm(forms.Form):
    """
    Fields are all optional at the Django level; AuthValidator decides, so the
    page shows its complete error list instead of Django's per-field messages.
    """
    email = forms.CharField(required=False)
    password = forms.CharField(required=False, strip=False, widget=forms.PasswordInput)

    def clean(self):
        cleaned = super().clean()
        result = AuthValidator().validate_login_data(cleaned.get('email', ''), cleaned.get('password', ''))
        if not result.is_valid:
            raise ValidationError(list(result.errors))
        return cleaned


class RegistrationForm(forms.Form):
    email = forms.CharField(required=False)
    password = forms.CharField(required=False, strip=False, widget=forms.PasswordInput)
    forename = forms.CharField(required=False, strip=False)
    surname = forms.CharField(required=False, strip=False)

    def clean(self):
        cleaned = super().clean()
        result = AuthValidator().validate_registration_data(
            cleaned.get('email', ''),
            cleaned.get('password', ''),
            cleaned.get('forename', ''),
            cleaned.get('surname', ''),
        )
        if not result.is_valid:
            raise ValidationError(list(result.errors))
        return cleaned
