# accounts/views.py
import logging

from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods, require_POST

from jobs.api import BackendError

from .api import AuthenticationFailed, AuthService
from .forms import LoginForm, RegistrationForm
from .session import (
    SESSION_LOGIN_SUCCESS_KEY,
    SESSION_REDIRECT_KEY,
    actor_from_session,
    start_session,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred. Please try again later."


def get_auth_service():
    return AuthService()


def _next_url(request):
    target = request.session.pop(SESSION_REDIRECT_KEY, None)
    if target and url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return target
    return '/'


def _render_errors(request, template, title, form, errors, status):
    return render(request, template, {
        'title': title,
        'form': form,
        'validation_errors': list(errors),
    }, status=status)


@require_http_methods(["GET", "POST"])
def login_view(request):
    if actor_from_session(request.session).is_authenticated:
        return redirect('home')

    if request.method == 'GET':
        return render(request, 'accounts/login.html', {
            'title': 'Login',
            'form': LoginForm(),
            'auth_required': request.GET.get('error') == 'auth_required',
        })

    form = LoginForm(request.POST)
    if not form.is_valid():
        return _render_errors(request, 'accounts/login.html', 'Login', form, form.non_field_errors(), 400)

    try:
        user = get_auth_service().login(form.cleaned_data['email'], form.cleaned_data['password'])
    except AuthenticationFailed as e:
        logger.info("Login rejected for %s: %s", form.cleaned_data['email'], e.message)
        return _render_errors(request, 'accounts/login.html', 'Login', form, [e.message or "Invalid credentials"], 401)
    except BackendError:
        logger.exception("Login failed")
        return _render_errors(request, 'accounts/login.html', 'Login', form, [GENERIC_ERROR], 500)

    next_url = _next_url(request)
    start_session(request, user)
    request.session[SESSION_LOGIN_SUCCESS_KEY] = (
        f"Logged in successfully as: {user.get('forename', '')} {user.get('surname', '')}".strip()
    )
    return redirect(next_url)


@require_http_methods(["GET", "POST"])
def register_view(request):
    if actor_from_session(request.session).is_authenticated:
        return redirect('home')

    if request.method == 'GET':
        return render(request, 'accounts/register.html', {'title': 'Register', 'form': RegistrationForm()})

    form = RegistrationForm(request.POST)
    if not form.is_valid():
        return _render_errors(request, 'accounts/register.html', 'Register', form, form.non_field_errors(), 400)

    data = form.cleaned_data
    try:
        user = get_auth_service().register(data['email'], data['password'], data['forename'], data['surname'])
    except AuthenticationFailed as e:
        logger.info("Registration rejected for %s: %s", data['email'], e.message)
        errors = e.details or [e.message or "Registration failed"]
        return _render_errors(request, 'accounts/register.html', 'Register', form, errors, 400)
    except BackendError:
        logger.exception("Registration failed")
        return _render_errors(request, 'accounts/register.html', 'Register', form, [GENERIC_ERROR], 500)

    start_session(request, user)
    request.session[SESSION_LOGIN_SUCCESS_KEY] = (
        f"Registered and logged in successfully as: {user.get('forename', '')} {user.get('surname', '')}".strip()
    )
    return redirect('home')


@require_POST
def logout_view(request):
    request.session.flush()
    return redirect('home')
