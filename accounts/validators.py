# accounts/validators.py
from jobs.validation import ValidationResult, password_strength, validate_email

NAME_MAX_LENGTH = 50


class AuthValidator:
    """
    Login / registration checks. Unlike the job role form these accumulate:
    every problem is reported at once so the user can fix them in one go.
    """

    def validate_email(self, email) -> ValidationResult:
        return validate_email(email)

    def validate_password(self, password) -> ValidationResult:
        if not password:
            return ValidationResult.fail("Password is required")
        return ValidationResult(password_strength(password).missing)

    def validate_name(self, name, field_name) -> ValidationResult:
        if not name or not name.strip():
            return ValidationResult.fail(f"{field_name} is required")
        if len(name) > NAME_MAX_LENGTH:
            return ValidationResult.fail(f"{field_name} must not exceed {NAME_MAX_LENGTH} characters")
        return ValidationResult.ok()

    def validate_login_data(self, email, password) -> ValidationResult:
        password_present = ValidationResult.ok()
        if not password or not password.strip():
            password_present = ValidationResult.fail("Password is required")
        return ValidationResult.merge(self.validate_email(email), password_present)

    def validate_registration_data(self, email, password, forename, surname) -> ValidationResult:
        return ValidationResult.merge(
            self.validate_email(email),
            self.validate_password(password),
            self.validate_name(forename, "First name"),
            self.validate_name(surname, "Last name"),
        )
