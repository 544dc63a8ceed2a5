# accounts/api.py
import logging

from jobs.api import BackendClient, BackendError

logger = logging.getLogger(__name__)


class AuthenticationFailed(BackendError):
    """The backend rejected the credentials or the registration data."""


class AuthService(BackendClient):

    def _post(self, path, payload, default_message):
        response = self._request('POST', path, json=payload)
        body = self._error_body(response)
        if not response.ok:
            if response.status_code < 500:
                raise AuthenticationFailed(
                    body.get('message') or default_message,
                    status_code=response.status_code,
                    details=body.get('details'),
                )
            raise BackendError(body.get('message') or default_message, status_code=response.status_code)
        user = body.get('user')
        if not user:
            raise BackendError("Authentication response did not include a user", response.status_code)
        return user

    def login(self, email, password):
        """Returns the backend's user dict (userId, email, forename, surname, role)."""
        return self._post('/api/auth/login', {'email': email, 'password': password}, "Invalid credentials")

    def register(self, email, password, forename, surname):
        payload = {'email': email, 'password': password, 'forename': forename, 'surname': surname}
        return self._post('/api/auth/register', payload, "Registration failed")
