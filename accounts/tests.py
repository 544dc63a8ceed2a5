# accounts/tests.py
from unittest import mock

from django.test import Client, SimpleTestCase
from django.urls import reverse

from jobs.api import BackendError
from jobs.tests.utils import fake_response, log_in

from .api import AuthenticationFailed, AuthService
from .session import Actor, actor_from_session
from .validators import AuthValidator


class AuthValidatorTest(SimpleTestCase):
    def setUp(self):
        self.validator = AuthValidator()

    def test_registration_accumulates_every_error(self):
        result = self.validator.validate_registration_data('not-an-email', 'short', '', 'S' * 51)
        self.assertFalse(result.is_valid)
        self.assertIn("Please enter a valid email address", result.errors)
        self.assertIn("Password must be at least 8 characters long", result.errors)
        self.assertIn("First name is required", result.errors)
        self.assertIn("Last name must not exceed 50 characters", result.errors)

    def test_registration_valid(self):
        result = self.validator.validate_registration_data('jane@example.com', 'Password1!', 'Jane', 'Doe')
        self.assertTrue(result.is_valid)

    def test_login_only_checks_password_presence(self):
        self.assertTrue(self.validator.validate_login_data('jane@example.com', 'x').is_valid)
        result = self.validator.validate_login_data('', '')
        self.assertEqual(result.errors, ("Email is required", "Password is required"))

    def test_password_required(self):
        self.assertEqual(self.validator.validate_password('').errors, ("Password is required",))


class ActorTest(SimpleTestCase):
    def test_roles(self):
        self.assertIs(actor_from_session({}), Actor.ANONYMOUS)
        self.assertIs(actor_from_session({'is_authenticated': True, 'user': {'role': 'Applicant'}}), Actor.MEMBER)
        self.assertIs(actor_from_session({'is_authenticated': True, 'user': {'role': 'Admin'}}), Actor.ADMIN)
        self.assertIs(actor_from_session({'is_authenticated': True, 'user': {'user_type': 'Admin'}}), Actor.ADMIN)
        self.assertIs(actor_from_session({'is_authenticated': False, 'user': {'role': 'Admin'}}), Actor.ANONYMOUS)


class AuthServiceTest(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.service = AuthService(base_url='http://api.test', timeout=5, session=self.session)

    def test_login_returns_user(self):
        user = {'userId': 1, 'email': 'jane@example.com', 'forename': 'Jane', 'surname': 'Doe', 'role': 'Admin'}
        self.session.request.return_value = fake_response(200, {'user': user, 'token': 't'})
        self.assertEqual(self.service.login('jane@example.com', 'pw'), user)
        self.session.request.assert_called_once_with(
            'POST', 'http://api.test/api/auth/login',
            json={'email': 'jane@example.com', 'password': 'pw'}, timeout=5,
        )

    def test_rejected_credentials(self):
        self.session.request.return_value = fake_response(401, {'message': 'Invalid email or password'})
        with self.assertRaises(AuthenticationFailed) as ctx:
            self.service.login('jane@example.com', 'pw')
        self.assertEqual(ctx.exception.message, 'Invalid email or password')

    def test_server_error_is_not_auth_failure(self):
        self.session.request.return_value = fake_response(503, {})
        with self.assertRaises(BackendError) as ctx:
            self.service.register('jane@example.com', 'Password1!', 'Jane', 'Doe')
        self.assertNotIsInstance(ctx.exception, AuthenticationFailed)


@mock.patch('accounts.views.get_auth_service')
class LoginViewTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()
        self.user = {'userId': 1, 'email': 'jane@example.com', 'forename': 'Jane', 'surname': 'Doe',
                     'role': 'Applicant'}

    def test_get(self, get_service):
        resp = self.client.get(reverse('login'), {'error': 'auth_required'})
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context['auth_required'])

    def test_invalid_input_lists_errors(self, get_service):
        resp = self.client.post(reverse('login'), {'email': 'bad', 'password': ''})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.context['validation_errors'],
                         ["Please enter a valid email address", "Password is required"])
        self.assertContains(resp, 'value="bad"', status_code=400)
        get_service.return_value.login.assert_not_called()

    def test_success_starts_session(self, get_service):
        get_service.return_value.login.return_value = self.user
        resp = self.client.post(reverse('login'), {'email': 'jane@example.com', 'password': 'secret'})
        self.assertRedirects(resp, '/', fetch_redirect_response=False)
        session = self.client.session
        self.assertTrue(session['is_authenticated'])
        self.assertEqual(session['user']['email'], 'jane@example.com')
        self.assertEqual(session['login_success'], 'Logged in successfully as: Jane Doe')

    def test_success_returns_to_stored_url(self, get_service):
        get_service.return_value.login.return_value = self.user
        self.client.get(reverse('job_role_apply', args=['5']))
        resp = self.client.post(reverse('login'), {'email': 'jane@example.com', 'password': 'secret'})
        self.assertRedirects(resp, '/job-roles/5/apply/', fetch_redirect_response=False)

    def test_rejected(self, get_service):
        get_service.return_value.login.side_effect = AuthenticationFailed('Invalid email or password', 401)
        resp = self.client.post(reverse('login'), {'email': 'jane@example.com', 'password': 'wrong'})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.context['validation_errors'], ['Invalid email or password'])

    def test_backend_down(self, get_service):
        get_service.return_value.login.side_effect = BackendError('down')
        resp = self.client.post(reverse('login'), {'email': 'jane@example.com', 'password': 'secret'})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.context['validation_errors'], ["An error occurred. Please try again later."])

    def test_already_logged_in(self, get_service):
        log_in(self.client)
        resp = self.client.get(reverse('login'))
        self.assertRedirects(resp, reverse('home'), fetch_redirect_response=False)


@mock.patch('accounts.views.get_auth_service')
class RegisterViewTest(SimpleTestCase):
    def setUp(self):
        self.client = Client()

    def test_accumulated_errors(self, get_service):
        resp = self.client.post(reverse('register'), {
            'email': '', 'password': 'weak', 'forename': '', 'surname': 'Doe',
        })
        self.assertEqual(resp.status_code, 400)
        errors = resp.context['validation_errors']
        self.assertEqual(errors[0], "Email is required")
        self.assertIn("First name is required", errors)
        self.assertIn("Password must contain at least one uppercase letter", errors)
        get_service.return_value.register.assert_not_called()

    def test_success(self, get_service):
        get_service.return_value.register.return_value = {
            'userId': 2, 'email': 'sam@example.com', 'forename': 'Sam', 'surname': 'Lee', 'role': 'Applicant',
        }
        resp = self.client.post(reverse('register'), {
            'email': 'sam@example.com', 'password': 'Password1!', 'forename': 'Sam', 'surname': 'Lee',
        })
        self.assertRedirects(resp, reverse('home'), fetch_redirect_response=False)
        self.assertEqual(self.client.session['login_success'], 'Registered and logged in successfully as: Sam Lee')

    def test_backend_details_shown(self, get_service):
        get_service.return_value.register.side_effect = AuthenticationFailed(
            'Validation failed', 400, details=['Email already registered'],
        )
        resp = self.client.post(reverse('register'), {
            'email': 'sam@example.com', 'password': 'Password1!', 'forename': 'Sam', 'surname': 'Lee',
        })
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.context['validation_errors'], ['Email already registered'])


class LogoutViewTest(SimpleTestCase):
    def test_logout_clears_session(self):
        client = Client()
        log_in(client)
        resp = client.post(reverse('logout'))
        self.assertRedirects(resp, reverse('home'), fetch_redirect_response=False)
        self.assertNotIn('user', client.session)

    def test_logout_requires_post(self):
        self.assertEqual(Client().get(reverse('logout')).status_code, 405)
